#!/usr/bin/env python3
# -- coding: utf-8 --
#
# sdk_matrix.py
# podrome
#
# Copyright 2024 podrome Project Authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found at
#
# https://opensource.org/license/MIT
#
# The above copyright notice and this permission
# notice shall be included in all copies or
# substantial portions of the Software.

"""
Platform to SDK mapping.

The order of each list is the merge order: later SDKs overwrite earlier
ones, so simulators come before devices and the device Info.plist wins.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from podrome.utils.apple.project import Platform


class SdkKind(str, Enum):
    DEVICE = "device"
    SIMULATOR = "simulator"
    DESKTOP = "desktop"
    CATALYST = "catalyst"


@dataclass(frozen=True)
class SdkVariant:
    """One xcodebuild SDK together with its display destination."""

    sdk: str
    destination: str
    kind: SdkKind

    @property
    def is_catalyst(self) -> bool:
        return self.kind == SdkKind.CATALYST

    def __str__(self) -> str:
        return self.sdk


MACCATALYST = SdkVariant(
    "maccatalyst", "generic/platform=macOS,variant=Mac Catalyst", SdkKind.CATALYST
)
IPHONESIMULATOR = SdkVariant(
    "iphonesimulator", "generic/platform=iOS Simulator", SdkKind.SIMULATOR
)
IPHONEOS = SdkVariant("iphoneos", "generic/platform=iOS", SdkKind.DEVICE)
MACOSX = SdkVariant("macosx", "generic/platform=macOS", SdkKind.DESKTOP)
APPLETVSIMULATOR = SdkVariant(
    "appletvsimulator", "generic/platform=tvOS Simulator", SdkKind.SIMULATOR
)
APPLETVOS = SdkVariant("appletvos", "generic/platform=tvOS", SdkKind.DEVICE)
WATCHSIMULATOR = SdkVariant(
    "watchsimulator", "generic/platform=watchOS Simulator", SdkKind.SIMULATOR
)
WATCHOS = SdkVariant("watchos", "generic/platform=watchOS", SdkKind.DEVICE)

DESTINATIONS = {
    Platform.IOS: [MACCATALYST, IPHONESIMULATOR, IPHONEOS],
    Platform.OSX: [MACOSX],
    Platform.TVOS: [APPLETVSIMULATOR, APPLETVOS],
    Platform.WATCHOS: [WATCHSIMULATOR, WATCHOS],
}


def catalyst_enabled_for(
    target_label: Optional[str],
    build_ios_catalyst: bool,
    skipping_targets: Iterable[str] = (),
) -> bool:
    if not build_ios_catalyst:
        return False
    if target_label is None:
        return True
    return target_label not in set(skipping_targets)


def resolve(
    platform,
    target_label: Optional[str] = None,
    build_ios_catalyst: bool = False,
    skipping_targets: Iterable[str] = (),
) -> List[SdkVariant]:
    """
    Ordered SDK variants to build a target of `platform` for.

    Args:
        platform: Platform or platform name ('ios', 'osx', 'tvos', 'watchos')
        target_label: Umbrella target label, checked against skipping_targets.
            None resolves for the platform as a whole.
        build_ios_catalyst: Include the Mac Catalyst variant for iOS
        skipping_targets: Target labels never built for Mac Catalyst

    Raises:
        ConfigurationError: for an unknown platform
    """
    platform = Platform.parse(platform)
    with_catalyst = catalyst_enabled_for(target_label, build_ios_catalyst, skipping_targets)
    return [
        sdk for sdk in DESTINATIONS[platform] if not sdk.is_catalyst or with_catalyst
    ]


def resolve_for_config(platform, config, target_label: Optional[str] = None) -> List[SdkVariant]:
    return resolve(
        platform,
        target_label,
        config.build_ios_catalyst,
        config.skipping_umbrella_targets_for_catalyst,
    )


def includes_target(sdk: SdkVariant, target_label: str, config) -> bool:
    """Whether `target_label` is built for `sdk` at all."""
    if not sdk.is_catalyst:
        return True
    return catalyst_enabled_for(
        target_label,
        config.build_ios_catalyst,
        config.skipping_umbrella_targets_for_catalyst,
    )
