#!/usr/bin/env python3
# -- coding: utf-8 --
#
# merge_frameworks.py
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
Lift per-pod build products to the per-SDK build directory.

xcodebuild leaves each pod's framework under
build/{configuration}-{sdk}/{pod}/{module}.framework. After merging, every
module is also available as build/{configuration}-{sdk}/{module}.framework.
"""

from pathlib import Path
from typing import List, Sequence

from .build_utils import copy_file
from .sdk_matrix import SdkVariant


def sdk_build_dir(build_dir, configuration: str, sdk) -> Path:
    return Path(build_dir) / f"{configuration}-{sdk}"


def framework_product_path(build_dir, configuration: str, sdk, package_name: str, module_name: str) -> Path:
    return sdk_build_dir(build_dir, configuration, sdk) / package_name / f"{module_name}.framework"


def merged_framework_path(build_dir, configuration: str, sdk, module_name: str) -> Path:
    return sdk_build_dir(build_dir, configuration, sdk) / f"{module_name}.framework"


def merge_frameworks(build_dir, target, sdks: Sequence[SdkVariant], configuration: str) -> List[Path]:
    """
    Copy each module's framework of `target` to the shared per-SDK path.

    SDKs are visited in order and existing frameworks are replaced, so the
    last SDK wins. Modules without a product for an SDK (pods that only
    ship vendored frameworks) are skipped.

    Returns:
        list: merged framework paths
    """
    print(f"[*] {target.label}")
    print(f"Pods: {', '.join(target.module_names)}")
    print("")

    merged = []
    for sdk in sdks:
        print(f"  - Copying {target.platform.value} platform and {sdk} sdk")
        for module in target.modules:
            src = framework_product_path(
                build_dir, configuration, sdk, module.package_name, module.module_name
            )
            if not src.is_dir():
                continue
            dst = merged_framework_path(build_dir, configuration, sdk, module.module_name)
            copy_file(src, dst)
            merged.append(dst)

    print("")
    return merged
