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
Error types raised while building frameworks.

Every fatal condition of a run is a RomeError. The CLI is the only place
that turns them into an exit status; library callers get the exception.
"""

from typing import List, Optional


class RomeError(Exception):
    """Base class for all podrome failures."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\n   hint: {self.hint}"
        return self.message


class ConfigurationError(RomeError):
    """Unknown platform, unreadable Rome.toml or an unsupported option."""


class BuildCommandError(RomeError):
    """An external tool (xcodebuild) exited with a non-zero status."""

    def __init__(self, command: List[str], err_code: int, output: str):
        self.command = list(command)
        self.err_code = err_code
        self.output = output
        super().__init__(
            f"Command failed with exit code {err_code}: {' '.join(self.command)}"
        )


class MissingBuildDirectoryError(RomeError):
    """The build phase finished but left no build directory behind."""

    def __init__(self, build_dir):
        self.build_dir = build_dir
        super().__init__(
            f"The build directory was not found in the expected location: {build_dir}",
            hint="xcodebuild produced no output; check the project and scheme names.",
        )
