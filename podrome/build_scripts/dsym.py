#!/usr/bin/env python3
# -- coding: utf-8 --
#
# dsym.py
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

from pathlib import Path
from typing import List

from .build_utils import copy_into, remove_path
from .merge_frameworks import sdk_build_dir

DSYM_PLATFORMS = ["iphoneos", "iphonesimulator"]


def copy_dsym_files(dsym_dir, build_dir, configuration: str) -> List[Path]:
    """
    Collect generated dSYM bundles into dsym_dir/{platform}/.

    Args:
        dsym_dir: Destination root, removed before copying
        build_dir: xcodebuild build directory
        configuration: Build configuration name

    Returns:
        list: copied dSYM paths
    """
    dsym_dir = Path(dsym_dir)
    remove_path(dsym_dir)

    copied = []
    for platform in DSYM_PLATFORMS:
        platform_dir = sdk_build_dir(build_dir, configuration, platform)
        for dsym in sorted(platform_dir.glob("**/*.dSYM")):
            copied.append(copy_into(dsym, dsym_dir / platform))
    if copied:
        print(f"Copied {len(copied)} dSYM bundle(s) to {dsym_dir}")
    return copied
