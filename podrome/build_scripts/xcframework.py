#!/usr/bin/env python3
# -- coding: utf-8 --
#
# xcframework.py
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
XCFramework creation from per-SDK framework products.

A module gets one XCFramework holding the slices of every platform it is
built for. It is created only when every SDK of each of those platforms
produced a framework. A partial XCFramework would silently lack slices, so
the module is skipped with a diagnostic instead.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from podrome.errors import BuildCommandError, ConfigurationError
from podrome.utils.apple.project import ModuleDescriptor, Platform
from podrome.utils.cmd.cmd_util import exec_command, format_command
from .build_utils import remove_path
from .sdk_matrix import DESTINATIONS, catalyst_enabled_for

XCODEBUILD = "xcodebuild"
VENDORED_ONLY_HINT = "It could be a Pod with only vendored frameworks."


@dataclass
class SkippedModule:
    module_name: str
    platforms: List[Platform]
    missing: List[str] = field(default_factory=list)


@dataclass
class BuiltModule:
    """A module as it is handed to the assembler, merged over all targets."""

    module: ModuleDescriptor
    # platform -> umbrella target labels, in first-seen order
    platforms: Dict[Platform, List[str]] = field(default_factory=dict)


def collect_built_modules(targets) -> List[BuiltModule]:
    """Modules of all targets, unique by (pod name, module name)."""
    modules: Dict[Tuple[str, str], BuiltModule] = {}
    for target in targets:
        for module in target.modules:
            key = module.key
            if key not in modules:
                modules[key] = BuiltModule(module)
            labels = modules[key].platforms.setdefault(target.platform, [])
            labels.append(target.label)
    return list(modules.values())


class XCFrameworkAssembler:
    def __init__(self, build_dir, output_dir, config, runner=exec_command, cwd=None):
        self.build_dir = Path(build_dir)
        self.output_dir = Path(output_dir)
        self.config = config
        self.runner = runner
        self.cwd = cwd
        self.created: List[Path] = []
        self.skipped: List[SkippedModule] = []
        # output name -> (pod, module) that produced it in this run
        self._owners: Dict[str, Tuple[str, str]] = {}

    def expected_sdks(self, platform, target_labels: Optional[Sequence[str]] = None):
        """
        SDKs a module must have been built for.

        Mac Catalyst is expected when the flag is on and at least one of the
        module's umbrella targets is not excluded from catalyst builds.
        """
        platform = Platform.parse(platform)
        labels = list(target_labels) if target_labels else [None]
        with_catalyst = any(
            catalyst_enabled_for(
                label,
                self.config.build_ios_catalyst,
                self.config.skipping_umbrella_targets_for_catalyst,
            )
            for label in labels
        )
        return [
            sdk for sdk in DESTINATIONS[platform] if not sdk.is_catalyst or with_catalyst
        ]

    def framework_products(self, module: ModuleDescriptor, platform, target_labels=None) -> List[str]:
        configuration = self.config.configuration
        return [
            f"{configuration}-{sdk.sdk}/{module.package_name}/{module.module_name}.framework"
            for sdk in self.expected_sdks(platform, target_labels)
        ]

    def assemble(self, module: ModuleDescriptor, platform, target_labels=None) -> Optional[Path]:
        """Create the XCFramework of a module built for a single platform."""
        return self.assemble_platforms(module, {Platform.parse(platform): target_labels})

    def assemble_platforms(self, module: ModuleDescriptor, platforms) -> Optional[Path]:
        """
        Create {output_dir}/{module}.xcframework from every platform's variants.

        Args:
            module: Module to assemble
            platforms: mapping of platform to the umbrella target labels
                the module is built for on it (None for no label)

        Returns:
            Path of the XCFramework, or None when the module was skipped

        Raises:
            ConfigurationError: if another pod already produced an
                XCFramework with the same name in this run
            BuildCommandError: if xcodebuild -create-xcframework fails
        """
        module_name = module.module_name
        platforms = {Platform.parse(p): labels for p, labels in platforms.items()}
        products = []
        for platform, labels in platforms.items():
            products += self.framework_products(module, platform, labels)
        missing = [p for p in products if not (self.build_dir / p).is_dir()]

        if missing:
            print(f"[*] Skipping XCFramework creation for {module_name}")
            for path in missing:
                print(f"    - because it has no built product at {path}")
            print(f"    - {VENDORED_ONLY_HINT}")
            self.skipped.append(SkippedModule(module_name, list(platforms), missing))
            return None

        output = self.output_dir / f"{module_name}.xcframework"
        owner = self._owners.get(output.name)
        if owner is not None and owner != module.key:
            raise ConfigurationError(
                f"{output.name} is produced by both pod {owner[0]} and pod {module.package_name}",
                hint="give the modules distinct names",
            )

        print(f"[*] Creating XCFramework for {module_name}")
        for path in products:
            print(f"    - Variant: {path}")

        # -create-xcframework refuses to overwrite a previous run's output
        remove_path(output)
        command = [
            XCODEBUILD,
            "-create-xcframework",
            "-allow-internal-distribution",
            "-output",
            str(output),
        ]
        for path in products:
            command += ["-framework", str(self.build_dir / path)]

        err_code, err_msg = self.runner(command, cwd=self.cwd)
        if err_code != 0:
            print(f"!!!!!!!!!!! make_xcframework {output} failed, cmd:['{format_command(command)}'] !!!!!!!!!!!!!!!")
            raise BuildCommandError(command, err_code, err_msg)

        self._owners[output.name] = module.key
        self.created.append(output)
        return output

    def assemble_all(self, targets) -> List[Path]:
        for built in collect_built_modules(targets):
            self.assemble_platforms(built.module, built.platforms)
        return list(self.created)
