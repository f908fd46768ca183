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
Run configuration handler for podrome.

Reads the [rome] table of Rome.toml into an immutable RunConfiguration.
"""

import dataclasses
import importlib
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

try:
    import tomllib
except ImportError:
    # For Python < 3.11
    import tomli as tomllib

from podrome.errors import ConfigurationError
from .project import ProjectSnapshot, load_project_snapshot

ROME_CONFIG_FILE = "Rome.toml"

Hook = Callable[[ProjectSnapshot], Any]


@dataclass(frozen=True)
class RunConfiguration:
    """Options of one podrome run."""

    configuration: str = "Debug"
    enable_bitcode: bool = False
    dsym: bool = True
    build_ios_catalyst: bool = False
    skipping_umbrella_targets_for_catalyst: Tuple[str, ...] = ()
    run_in_x86_64: bool = False
    pre_compile: Optional[Hook] = None
    post_compile: Optional[Hook] = None
    # one -alltargets invocation per sdk instead of one per umbrella scheme
    build_all_targets: bool = False
    # False stages the merged .framework bundles without xcframework assembly
    create_xcframework: bool = True
    clean_build_dir: bool = False

    def __post_init__(self):
        skipping = self.skipping_umbrella_targets_for_catalyst
        if isinstance(skipping, str):
            skipping = [skipping]
        object.__setattr__(
            self, "skipping_umbrella_targets_for_catalyst", tuple(skipping or ())
        )

    def replace(self, **changes) -> "RunConfiguration":
        changes = {k: v for k, v in changes.items() if v is not None}
        return dataclasses.replace(self, **changes)

    @classmethod
    def option_names(cls):
        return [f.name for f in dataclasses.fields(cls)]

    @classmethod
    def from_dict(cls, options: Dict[str, Any], base_dir=None) -> "RunConfiguration":
        """
        Create a RunConfiguration from the [rome] table.

        Hook values are either callables or "module:function" references,
        the module being importable from base_dir.

        Raises:
            ConfigurationError: for unknown keys or unresolvable hooks
        """
        known = cls.option_names()
        unknown = [k for k in options if k not in known]
        if unknown:
            raise ConfigurationError(
                f"Unknown option(s) in [rome]: {', '.join(sorted(unknown))}",
                hint=f"supported options: {', '.join(known)}",
            )
        values = dict(options)
        for hook in ("pre_compile", "post_compile"):
            if hook in values:
                values[hook] = resolve_hook(values[hook], base_dir)
        return cls(**values)


def resolve_hook(ref, base_dir=None) -> Optional[Hook]:
    if ref is None or callable(ref):
        return ref
    if not isinstance(ref, str) or ":" not in ref:
        raise ConfigurationError(
            f"Invalid hook reference '{ref}'", hint="expected 'module:function'"
        )
    module_name, func_name = ref.split(":", 1)
    if base_dir is not None and str(base_dir) not in sys.path:
        sys.path.append(str(base_dir))
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import hook module '{module_name}': {e}")
    func = getattr(module, func_name, None)
    if not callable(func):
        raise ConfigurationError(f"Hook '{ref}' is not a callable")
    return func


def find_rome_config(project_dir=None) -> Path:
    project_dir = Path(project_dir or os.getcwd())
    return project_dir / ROME_CONFIG_FILE


def load_rome_config(config_path) -> Tuple[ProjectSnapshot, RunConfiguration]:
    """
    Load Rome.toml.

    Returns:
        tuple: (ProjectSnapshot, RunConfiguration)

    Raises:
        ConfigurationError: when the file is missing or invalid
    """
    config_path = Path(config_path)
    if not config_path.is_file():
        raise ConfigurationError(
            f"{ROME_CONFIG_FILE} not found at {config_path}",
            hint="run podrome from the directory holding your Podfile",
        )
    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Error reading {config_path}: {e}")

    base_dir = config_path.parent.resolve()
    snapshot = load_project_snapshot(toml_data, base_dir)
    config = RunConfiguration.from_dict(toml_data.get("rome", {}), base_dir)
    return snapshot, config
