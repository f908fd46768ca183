#!/usr/bin/env python3
# -- coding: utf-8 --
#
# build_rome.py
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
Prebuild every pod of a Pods project into frameworks and XCFrameworks.

The run is strictly sequential and fails fast:
1. pre_compile hook
2. build each umbrella target for each SDK of its platform with xcodebuild,
   then merge the per-pod frameworks into the per-SDK build directory
3. create one XCFramework per module (or collect the raw frameworks)
4. clear Rome/ and copy products, vendored frameworks/libraries and
   resources into it
5. copy dSYM bundles to dSYM/
6. post_compile hook

Output:
    - XCFrameworks: Rome/{module}.xcframework
    - Symbols: dSYM/{iphoneos,iphonesimulator}/*.dSYM
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from podrome.errors import MissingBuildDirectoryError
from podrome.utils.apple.config import RunConfiguration
from podrome.utils.apple.project import ProjectSnapshot
from podrome.utils.cmd.cmd_util import exec_command
from .build_utils import clean, format_elapsed, relative_display_path, remove_path, unique
from .dsym import copy_dsym_files
from .merge_frameworks import merge_frameworks
from .sdk_matrix import includes_target, resolve_for_config
from .staging import StagingManifest, collect_raw_frameworks, stage
from .xcframework import SkippedModule, XCFrameworkAssembler
from .xcodebuild import AllTargets, TargetScheme, XcodeBuildDriver

XCFRAMEWORKS_DIR_NAME = "xcframeworks"


@dataclass
class RunResult:
    """Outcome of a successful run."""

    archives: List[Path] = field(default_factory=list)
    skipped: List[SkippedModule] = field(default_factory=list)
    merged: List[Path] = field(default_factory=list)
    staged: List[Path] = field(default_factory=list)
    dsyms: List[Path] = field(default_factory=list)
    elapsed: float = 0.0


class Rome:
    def __init__(self, snapshot: ProjectSnapshot, config: Optional[RunConfiguration] = None, runner=exec_command):
        self.snapshot = snapshot
        self.config = config or RunConfiguration()
        self.runner = runner
        self.driver = XcodeBuildDriver(
            snapshot.project_path,
            self.config,
            runner=runner,
            cwd=str(snapshot.sandbox_root.parent),
        )

    @property
    def build_dir(self) -> Path:
        return self.snapshot.build_dir

    @property
    def rome_dir(self) -> Path:
        return self.snapshot.rome_dir

    def run(self) -> RunResult:
        before_time = time.time()
        result = RunResult()

        if self.config.pre_compile:
            self.config.pre_compile(self.snapshot)

        if self.config.clean_build_dir:
            remove_path(self.build_dir)

        print("==================Building frameworks========================")
        result.merged = self.build_frameworks()

        if not self.build_dir.is_dir():
            raise MissingBuildDirectoryError(self.build_dir)

        manifest = StagingManifest()
        if self.config.create_xcframework:
            assembler = self.assemble_xcframeworks()
            manifest.archives += assembler.created
            result.skipped = list(assembler.skipped)
        else:
            manifest.archives += collect_raw_frameworks(
                self.build_dir, self.snapshot.platforms(), self.config
            )
        manifest.add_targets(self.snapshot.targets)

        print(f"Copying resources and vendored products to `{relative_display_path(self.rome_dir)}`")
        result.staged = stage(self.rome_dir, manifest)
        result.archives = unique([self.rome_dir / p.name for p in manifest.deduplicated().archives])

        if self.config.dsym:
            result.dsyms = copy_dsym_files(
                self.snapshot.dsym_dir, self.build_dir, self.config.configuration
            )

        if self.config.post_compile:
            self.config.post_compile(self.snapshot)

        result.elapsed = time.time() - before_time
        self.print_summary(result)
        print(format_elapsed(before_time))
        return result

    def build_frameworks(self) -> List[Path]:
        """Build and merge every platform. Raises on the first failed build."""
        merged = []
        for platform in self.snapshot.platforms():
            targets = self.snapshot.buildable_targets(platform)
            if not targets:
                continue
            for sdk in resolve_for_config(platform, self.config):
                sdk_targets = [t for t in targets if includes_target(sdk, t.label, self.config)]
                if not sdk_targets:
                    continue
                if self.config.build_all_targets:
                    self.driver.build(AllTargets(), sdk, sdk_targets)
                else:
                    for target in sdk_targets:
                        self.driver.build(TargetScheme(target.label), sdk)

            for target in targets:
                sdks = resolve_for_config(platform, self.config, target.label)
                merged += merge_frameworks(
                    self.build_dir, target, sdks, self.config.configuration
                )
        return merged

    def assemble_xcframeworks(self) -> XCFrameworkAssembler:
        output_dir = self.build_dir / XCFRAMEWORKS_DIR_NAME
        clean(output_dir)
        print(f"Creating XCFrameworks from built products in `{relative_display_path(output_dir)}`")
        assembler = XCFrameworkAssembler(
            self.build_dir,
            output_dir,
            self.config,
            runner=self.runner,
            cwd=str(self.snapshot.sandbox_root.parent),
        )
        assembler.assemble_all(
            [t for t in self.snapshot.targets if t.modules]
        )
        return assembler

    def print_summary(self, result: RunResult):
        print("==================Output========================")
        for archive in result.archives:
            print(f"  {relative_display_path(archive)}")
        if result.skipped:
            print(f"Skipped {len(result.skipped)} module(s) without all variants:")
            for skipped in result.skipped:
                platforms = ", ".join(p.value for p in skipped.platforms)
                print(f"  - {skipped.module_name} ({platforms})")
        print(f"Staged {len(result.staged)} item(s) in {relative_display_path(self.rome_dir)}")


def build_rome(snapshot: ProjectSnapshot, config: Optional[RunConfiguration] = None, runner=exec_command) -> RunResult:
    return Rome(snapshot, config, runner=runner).run()
