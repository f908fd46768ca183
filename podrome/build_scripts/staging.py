#!/usr/bin/env python3
# -- coding: utf-8 --
#
# staging.py
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
Staging of build products, vendored binaries and resources into Rome/.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .build_utils import clean, copy_into, unique
from .merge_frameworks import sdk_build_dir
from .sdk_matrix import resolve_for_config

# frameworks of the umbrella targets themselves, e.g. Pods_App.framework
UMBRELLA_FRAMEWORK_PREFIXES = ("Pods_", "Pods-")


@dataclass
class StagingManifest:
    """What ends up in the destination directory."""

    archives: List[Path] = field(default_factory=list)
    vendored_libraries: List[Path] = field(default_factory=list)
    vendored_frameworks: List[Path] = field(default_factory=list)
    resources: List[Path] = field(default_factory=list)

    def add_module(self, module):
        self.vendored_libraries += list(module.vendored_libraries)
        self.vendored_frameworks += list(module.vendored_frameworks)
        self.resources += list(module.resources)

    def add_targets(self, targets):
        for target in targets:
            for module in target.modules:
                self.add_module(module)

    def deduplicated(self) -> "StagingManifest":
        return StagingManifest(
            archives=unique(self.archives),
            vendored_libraries=unique(self.vendored_libraries),
            vendored_frameworks=unique(self.vendored_frameworks),
            resources=unique(self.resources),
        )

    def items(self) -> List[Path]:
        """Copy order: build products first, then resources and vendored items."""
        manifest = self.deduplicated()
        return (
            manifest.archives
            + manifest.resources
            + manifest.vendored_libraries
            + manifest.vendored_frameworks
        )


def is_umbrella_framework(path) -> bool:
    return Path(path).name.startswith(UMBRELLA_FRAMEWORK_PREFIXES)


def collect_raw_frameworks(build_dir, platforms, config) -> List[Path]:
    """
    Merged frameworks of every SDK, in copy order.

    SDK directories are listed in merge order (simulator before device) so
    that copying them in sequence leaves the device framework, and its
    Info.plist, in place. App Store validation rejects simulator plists.
    """
    frameworks = []
    for platform in platforms:
        for sdk in resolve_for_config(platform, config):
            sdk_dir = sdk_build_dir(build_dir, config.configuration, sdk)
            if not sdk_dir.is_dir():
                continue
            for framework in sorted(sdk_dir.glob("*.framework")):
                if is_umbrella_framework(framework):
                    continue
                frameworks.append(framework)
    return frameworks


def stage(destination, manifest: StagingManifest) -> List[Path]:
    """
    Clear `destination` and copy every manifest item into it.

    Items are copied by basename; a later item with the same name replaces
    an earlier one. Missing vendored files are reported and skipped.

    Returns:
        list: staged paths inside destination
    """
    destination = Path(destination)
    clean(destination)

    staged = []
    for item in manifest.items():
        item = Path(item)
        if not item.exists():
            print(f"WARNING: {item} does not exist, skip copying")
            continue
        staged.append(copy_into(item, destination))
    return unique(staged)
