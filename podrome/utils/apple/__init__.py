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

"""Apple project description and run configuration for podrome."""

from .config import RunConfiguration, load_rome_config
from .project import BuildTarget, ModuleDescriptor, Platform, ProjectSnapshot

__all__ = [
    'BuildTarget',
    'ModuleDescriptor',
    'Platform',
    'ProjectSnapshot',
    'RunConfiguration',
    'load_rome_config',
]
