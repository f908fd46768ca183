import pytest

from podrome.build_scripts.sdk_matrix import (
    SdkKind,
    includes_target,
    resolve,
    resolve_for_config,
)
from podrome.errors import ConfigurationError
from podrome.utils.apple.config import RunConfiguration
from podrome.utils.apple.project import Platform


@pytest.mark.parametrize(
    ("platform", "expected"),
    [
        ("ios", ["iphonesimulator", "iphoneos"]),
        ("osx", ["macosx"]),
        ("macos", ["macosx"]),
        ("tvos", ["appletvsimulator", "appletvos"]),
        ("watchos", ["watchsimulator", "watchos"]),
        (Platform.IOS, ["iphonesimulator", "iphoneos"]),
    ],
)
def test_resolve_returns_ordered_sdks(platform, expected) -> None:
    sdks = resolve(platform)
    assert [sdk.sdk for sdk in sdks] == expected


@pytest.mark.parametrize("platform", ["ios", "tvos", "watchos"])
def test_device_sdk_is_merged_after_simulator(platform: str) -> None:
    kinds = [sdk.kind for sdk in resolve(platform)]
    assert kinds.index(SdkKind.SIMULATOR) < kinds.index(SdkKind.DEVICE)


@pytest.mark.parametrize("platform", ["android", "visionos", ""])
def test_unknown_platform_is_a_configuration_error(platform: str) -> None:
    with pytest.raises(ConfigurationError, match="has no destination configured"):
        resolve(platform)


@pytest.mark.parametrize(
    ("flag", "skipping", "label", "with_catalyst"),
    [
        (False, (), "Pods-App", False),
        (False, (), None, False),
        (True, (), "Pods-App", True),
        (True, (), None, True),
        (True, ("Pods-Widget",), "Pods-App", True),
        (True, ("Pods-Widget",), "Pods-Widget", False),
        (False, ("Pods-Widget",), "Pods-App", False),
    ],
)
def test_catalyst_included_iff_flag_set_and_target_not_skipped(flag, skipping, label, with_catalyst) -> None:
    sdks = resolve("ios", label, build_ios_catalyst=flag, skipping_targets=skipping)
    assert any(sdk.is_catalyst for sdk in sdks) is with_catalyst
    if with_catalyst:
        assert sdks[0].sdk == "maccatalyst"
        assert sdks[0].destination == "generic/platform=macOS,variant=Mac Catalyst"


@pytest.mark.parametrize("platform", ["osx", "tvos", "watchos"])
def test_catalyst_flag_only_affects_ios(platform: str) -> None:
    assert not any(sdk.is_catalyst for sdk in resolve(platform, build_ios_catalyst=True))


def test_resolve_for_config_is_evaluated_per_target() -> None:
    config = RunConfiguration(
        build_ios_catalyst=True,
        skipping_umbrella_targets_for_catalyst=("Pods-Widget",),
    )
    app = [sdk.sdk for sdk in resolve_for_config("ios", config, "Pods-App")]
    widget = [sdk.sdk for sdk in resolve_for_config("ios", config, "Pods-Widget")]

    assert app == ["maccatalyst", "iphonesimulator", "iphoneos"]
    assert widget == ["iphonesimulator", "iphoneos"]


def test_includes_target_only_filters_catalyst() -> None:
    config = RunConfiguration(
        build_ios_catalyst=True,
        skipping_umbrella_targets_for_catalyst=("Pods-Widget",),
    )
    catalyst, simulator, device = resolve_for_config("ios", config)

    assert not includes_target(catalyst, "Pods-Widget", config)
    assert includes_target(catalyst, "Pods-App", config)
    assert includes_target(simulator, "Pods-Widget", config)
    assert includes_target(device, "Pods-Widget", config)
