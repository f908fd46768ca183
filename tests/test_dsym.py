from pathlib import Path

from podrome.build_scripts.dsym import copy_dsym_files


def _dsym(build_dir: Path, sdk: str, name: str, pod: str = "Alamofire") -> Path:
    dsym = build_dir / f"Release-{sdk}" / pod / name
    (dsym / "Contents").mkdir(parents=True)
    (dsym / "Contents" / "Info.plist").write_text(sdk, encoding="utf-8")
    return dsym


def test_dsyms_are_copied_per_platform(tmp_path: Path) -> None:
    build_dir = tmp_path / "build"
    _dsym(build_dir, "iphoneos", "Alamofire.framework.dSYM")
    _dsym(build_dir, "iphonesimulator", "Alamofire.framework.dSYM")
    _dsym(build_dir, "maccatalyst", "Alamofire.framework.dSYM")
    _dsym(build_dir, "iphoneos", "Kingfisher.framework.dSYM", pod="Kingfisher")
    dsym_dir = tmp_path / "dSYM"

    copied = copy_dsym_files(dsym_dir, build_dir, "Release")

    assert sorted(str(p.relative_to(dsym_dir)) for p in copied) == [
        "iphoneos/Alamofire.framework.dSYM",
        "iphoneos/Kingfisher.framework.dSYM",
        "iphonesimulator/Alamofire.framework.dSYM",
    ]
    assert not (dsym_dir / "maccatalyst").exists()


def test_dsym_directory_is_cleared_first(tmp_path: Path) -> None:
    dsym_dir = tmp_path / "dSYM"
    (dsym_dir / "iphoneos" / "Old.framework.dSYM").mkdir(parents=True)

    copied = copy_dsym_files(dsym_dir, tmp_path / "build", "Debug")

    assert copied == []
    assert not dsym_dir.exists()


def test_only_matching_configuration_is_collected(tmp_path: Path) -> None:
    build_dir = tmp_path / "build"
    _dsym(build_dir, "iphoneos", "Alamofire.framework.dSYM")

    assert copy_dsym_files(tmp_path / "dSYM", build_dir, "Debug") == []
