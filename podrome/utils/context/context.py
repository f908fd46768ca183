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

import os
from pathlib import Path

from podrome.utils.apple.config import find_rome_config, load_rome_config


# Where a command runs and which Rome.toml it reads
class CliContext:
    def __init__(self, project_dir=None):
        self.project_dir = Path(project_dir or os.getcwd())

    def config_path(self, override=None) -> Path:
        if override:
            return Path(override)
        return find_rome_config(self.project_dir)

    def load(self, override=None):
        """
        Read Rome.toml for this context.

        Returns:
            tuple: (ProjectSnapshot, RunConfiguration)

        Raises:
            ConfigurationError: when the file is missing or invalid
        """
        return load_rome_config(self.config_path(override))
