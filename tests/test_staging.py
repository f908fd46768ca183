from pathlib import Path
from typing import Dict

from conftest import make_target
from podrome.build_scripts.staging import (
    StagingManifest,
    collect_raw_frameworks,
    is_umbrella_framework,
    stage,
)
from podrome.utils.apple.config import RunConfiguration
from podrome.utils.apple.project import ModuleDescriptor


def _tree(root: Path) -> Dict[str, bytes]:
    return {
        str(p.relative_to(root)): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


def _inputs(tmp_path: Path) -> StagingManifest:
    archive = tmp_path / "build" / "xcframeworks" / "Alamofire.xcframework"
    archive.mkdir(parents=True)
    (archive / "Info.plist").write_text("archive", encoding="utf-8")
    library = tmp_path / "Pods" / "Vendor" / "libVendor.a"
    library.parent.mkdir(parents=True)
    library.write_bytes(b"!<arch>\n")
    framework = tmp_path / "Pods" / "Vendor" / "Vendor.framework"
    framework.mkdir()
    (framework / "Vendor").write_bytes(b"binary")
    resource = tmp_path / "Pods" / "Vendor" / "Vendor.bundle"
    resource.mkdir()
    (resource / "strings.json").write_text("{}", encoding="utf-8")
    return StagingManifest(
        archives=[archive],
        vendored_libraries=[library, library],
        vendored_frameworks=[framework],
        resources=[resource, resource],
    )


def test_stage_copies_every_item_once(tmp_path: Path) -> None:
    destination = tmp_path / "Rome"

    staged = stage(destination, _inputs(tmp_path))

    assert sorted(p.name for p in staged) == [
        "Alamofire.xcframework",
        "Vendor.bundle",
        "Vendor.framework",
        "libVendor.a",
    ]
    assert (destination / "Vendor.framework" / "Vendor").read_bytes() == b"binary"


def test_stage_clears_previous_contents(tmp_path: Path) -> None:
    destination = tmp_path / "Rome"
    destination.mkdir()
    (destination / "Removed.xcframework").mkdir()
    (destination / "stale.txt").write_text("", encoding="utf-8")

    stage(destination, _inputs(tmp_path))

    assert not (destination / "Removed.xcframework").exists()
    assert not (destination / "stale.txt").exists()


def test_stage_is_idempotent(tmp_path: Path) -> None:
    destination = tmp_path / "Rome"
    manifest = _inputs(tmp_path)

    stage(destination, manifest)
    first = _tree(destination)
    stage(destination, manifest)

    assert _tree(destination) == first


def test_stage_skips_missing_vendored_items(tmp_path: Path, capsys) -> None:
    manifest = StagingManifest(resources=[tmp_path / "missing.bundle"])

    assert stage(tmp_path / "Rome", manifest) == []
    assert "does not exist" in capsys.readouterr().out


def test_manifest_collects_module_artifacts() -> None:
    module = ModuleDescriptor(
        "Vendor",
        "Vendor",
        vendored_libraries=(Path("/p/libVendor.a"),),
        vendored_frameworks=(Path("/p/Vendor.framework"),),
        resources=(Path("/p/Vendor.bundle"),),
    )
    manifest = StagingManifest()
    manifest.add_targets([
        make_target("Pods-App"),
        make_target("Pods-Widget"),
    ])
    manifest.add_module(module)
    manifest.add_module(module)

    deduplicated = manifest.deduplicated()

    assert deduplicated.vendored_libraries == [Path("/p/libVendor.a")]
    assert deduplicated.vendored_frameworks == [Path("/p/Vendor.framework")]
    assert deduplicated.resources == [Path("/p/Vendor.bundle")]


def test_raw_frameworks_copy_device_after_simulator(tmp_path: Path) -> None:
    build_dir = tmp_path / "build"
    for sdk in ("iphoneos", "iphonesimulator"):
        framework = build_dir / f"Debug-{sdk}" / "Alamofire.framework"
        framework.mkdir(parents=True)
        (framework / "Info.plist").write_text(sdk, encoding="utf-8")
    (build_dir / "Debug-iphoneos" / "Pods_App.framework").mkdir()

    frameworks = collect_raw_frameworks(build_dir, ["ios"], RunConfiguration())
    stage(tmp_path / "Rome", StagingManifest(archives=frameworks))

    assert [p.parent.name for p in frameworks] == ["Debug-iphonesimulator", "Debug-iphoneos"]
    plist = tmp_path / "Rome" / "Alamofire.framework" / "Info.plist"
    assert plist.read_text(encoding="utf-8") == "iphoneos"
    assert not (tmp_path / "Rome" / "Pods_App.framework").exists()


def test_umbrella_frameworks_are_recognised() -> None:
    assert is_umbrella_framework("build/Debug-iphoneos/Pods_App.framework")
    assert is_umbrella_framework("Pods-App.framework")
    assert not is_umbrella_framework("PodsKit.framework")
