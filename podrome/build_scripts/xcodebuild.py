#!/usr/bin/env python3
# -- coding: utf-8 --
#
# xcodebuild.py
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
xcodebuild invocation for the Pods project.

One invocation builds either every target of the project (-alltargets) or
one umbrella target's scheme, for one SDK. Mac Catalyst can only be built
through a scheme with an explicit destination, so the driver turns an
all-targets request into one build per umbrella scheme for that SDK.
"""

from dataclasses import dataclass
from typing import List, Sequence, Union

from podrome.errors import BuildCommandError, ConfigurationError
from podrome.utils.cmd.cmd_util import exec_command, format_command
from .sdk_matrix import SdkVariant, includes_target

XCODEBUILD = "xcodebuild"

# xcodebuild rejects -sdk maccatalyst, catalyst needs a destination
CATALYST_BUILD_DESTINATION = "platform=macOS,variant=Mac Catalyst"
CATALYST_X86_64_BUILD_DESTINATION = "platform=macOS,arch=x86_64,variant=Mac Catalyst"
# ad-hoc signing so local catalyst builds need no certificate
CATALYST_CODE_SIGN_IDENTITY = "CODE_SIGN_IDENTITY=-"
BITCODE_BUILD_SETTING = "BITCODE_GENERATION_MODE=bitcode"
DEBUG_INFORMATION_BUILD_SETTINGS = [
    "DEBUG_INFORMATION_FORMAT=dwarf-with-dsym",
    "ONLY_ACTIVE_ARCH=NO",
]
RUN_IN_X86_64_PREFIX = ["arch", "-x86_64"]


@dataclass(frozen=True)
class AllTargets:
    """Build every target of the project."""

    def __str__(self) -> str:
        return "all targets"


@dataclass(frozen=True)
class TargetScheme:
    """Build the shared scheme of one umbrella target."""

    label: str

    def __str__(self) -> str:
        return self.label


BuildScope = Union[AllTargets, TargetScheme]


class XcodeBuildDriver:
    """Runs xcodebuild for a project, one (scope, sdk) pair at a time."""

    def __init__(self, project_path, config, runner=exec_command, cwd=None):
        self.project_path = project_path
        self.config = config
        self.runner = runner
        self.cwd = cwd

    def scope_args(self, scope: BuildScope) -> List[str]:
        if isinstance(scope, AllTargets):
            return ["-alltargets"]
        return ["-scheme", scope.label]

    def sdk_args(self, sdk: SdkVariant) -> List[str]:
        if sdk.is_catalyst:
            return ["-destination", self.catalyst_destination(), CATALYST_CODE_SIGN_IDENTITY]
        return ["-sdk", sdk.sdk]

    def catalyst_destination(self) -> str:
        # pin x86_64 only when the whole build runs under Rosetta
        if self.config.run_in_x86_64:
            return CATALYST_X86_64_BUILD_DESTINATION
        return CATALYST_BUILD_DESTINATION

    def command_for(self, scope: BuildScope, sdk: SdkVariant) -> List[str]:
        args = ["-project", str(self.project_path)]
        args += self.scope_args(scope)
        args += ["-configuration", self.config.configuration]
        args += self.sdk_args(sdk)
        if self.config.enable_bitcode:
            args.append(BITCODE_BUILD_SETTING)
        if self.config.dsym:
            args += DEBUG_INFORMATION_BUILD_SETTINGS

        command = [XCODEBUILD] + args
        if self.config.run_in_x86_64:
            command = RUN_IN_X86_64_PREFIX + command
        return command

    def select_scopes(
        self, scope: BuildScope, sdk: SdkVariant, targets: Sequence = ()
    ) -> List[BuildScope]:
        """
        Strategy selection: the scopes actually invoked for a requested scope.

        Args:
            scope: Requested scope
            sdk: SDK to build for
            targets: Umbrella targets used to expand an all-targets request
                for Mac Catalyst

        Raises:
            ConfigurationError: if an all-targets Mac Catalyst request
                expands to no scheme
        """
        if not (isinstance(scope, AllTargets) and sdk.is_catalyst):
            return [scope]
        schemes = [
            TargetScheme(t.label)
            for t in targets
            if includes_target(sdk, t.label, self.config)
        ]
        if not schemes:
            raise ConfigurationError(
                f"No umbrella target to build for {sdk.sdk}",
                hint="pass the targets to expand an all-targets request into schemes",
            )
        return schemes

    def build(self, scope: BuildScope, sdk: SdkVariant, targets: Sequence = ()):
        """
        Build `scope` for `sdk`.

        Raises:
            BuildCommandError: on the first non-zero exit of xcodebuild
        """
        for selected in self.select_scopes(scope, sdk, targets):
            self.invoke(selected, sdk)

    def invoke(self, scope: BuildScope, sdk: SdkVariant):
        command = self.command_for(scope, sdk)
        print(f"[*] Building {scope} for sdk {sdk.sdk} and destination {sdk.destination}")
        print(f"    $ {format_command(command)}")
        err_code, err_msg = self.runner(command, cwd=self.cwd)
        if err_code != 0:
            print(f"!!!!!!!!!!!build {scope} for {sdk.sdk} fail!!!!!!!!!!!!!!!")
            raise BuildCommandError(command, err_code, err_msg)
