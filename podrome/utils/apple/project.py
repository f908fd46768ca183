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
Flat snapshot of the Pods project that podrome builds.

The snapshot is captured once at the start of a run from Rome.toml and is
never mutated afterwards: targets, their root specs (modules) and the
vendored artifacts and resources each module ships.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Tuple

from podrome.errors import ConfigurationError


class Platform(str, Enum):
    """Apple platforms an umbrella target can be built for."""

    IOS = "ios"
    OSX = "osx"
    TVOS = "tvos"
    WATCHOS = "watchos"

    @classmethod
    def parse(cls, name) -> "Platform":
        if isinstance(name, cls):
            return name
        value = str(name).strip().lower()
        # CocoaPods says osx, everybody else says macos
        if value == "macos":
            value = "osx"
        for platform in cls:
            if platform.value == value:
                return platform
        raise ConfigurationError(
            f"Platform '{name}' has no destination configured in Rome",
            hint=f"supported platforms: {', '.join(p.value for p in cls)}",
        )


@dataclass(frozen=True)
class ModuleDescriptor:
    """Root spec of a pod as seen by one umbrella target."""

    package_name: str
    module_name: str
    vendored_libraries: Tuple[Path, ...] = ()
    vendored_frameworks: Tuple[Path, ...] = ()
    resources: Tuple[Path, ...] = ()

    @property
    def key(self) -> Tuple[str, str]:
        return (self.package_name, self.module_name)


@dataclass(frozen=True)
class BuildTarget:
    """Umbrella target (e.g. Pods-App) aggregating pods for one platform."""

    label: str
    platform: Platform
    deployment_target: str = ""
    modules: Tuple[ModuleDescriptor, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "platform", Platform.parse(self.platform))
        seen = set()
        unique = []
        for module in self.modules:
            if module.key in seen:
                continue
            seen.add(module.key)
            unique.append(module)
        object.__setattr__(self, "modules", tuple(unique))

    @property
    def module_names(self) -> List[str]:
        return [m.module_name for m in self.modules]


@dataclass(frozen=True)
class ProjectSnapshot:
    """Everything a run needs to know about the sandbox project."""

    project_path: Path
    sandbox_root: Path
    targets: Tuple[BuildTarget, ...] = ()

    @property
    def build_dir(self) -> Path:
        return self.sandbox_root.parent / "build"

    @property
    def rome_dir(self) -> Path:
        return self.sandbox_root.parent / "Rome"

    @property
    def dsym_dir(self) -> Path:
        return self.sandbox_root.parent / "dSYM"

    def platforms(self) -> List[Platform]:
        """Platforms of all targets, in the order they first appear."""
        platforms = []
        for target in self.targets:
            if target.platform not in platforms:
                platforms.append(target.platform)
        return platforms

    def buildable_targets(self, platform: Platform) -> List[BuildTarget]:
        # umbrella targets without any pod are never built
        return [t for t in self.targets if t.modules and t.platform == platform]


def _paths(values, base_dir: Path) -> Tuple[Path, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        values = [values]
    return tuple((base_dir / str(v)).resolve() for v in values)


def _load_module(data: Dict[str, Any], base_dir: Path, label: str) -> ModuleDescriptor:
    package = data.get("package") or data.get("pod")
    if not package:
        raise ConfigurationError(f"Module of target '{label}' has no package name")
    return ModuleDescriptor(
        package_name=package,
        module_name=data.get("module", package),
        vendored_libraries=_paths(data.get("vendored_libraries"), base_dir),
        vendored_frameworks=_paths(data.get("vendored_frameworks"), base_dir),
        resources=_paths(data.get("resources"), base_dir),
    )


def load_project_snapshot(toml_data: Dict[str, Any], base_dir: Path) -> ProjectSnapshot:
    """
    Build a ProjectSnapshot from the parsed contents of Rome.toml.

    Args:
        toml_data: Parsed TOML document
        base_dir: Directory relative paths are resolved against

    Raises:
        ConfigurationError: when the [project] table or a target is malformed
    """
    base_dir = Path(base_dir)
    project = toml_data.get("project", {})
    sandbox_root = (base_dir / project.get("sandbox_root", "Pods")).resolve()
    project_path = project.get("path")
    if project_path:
        project_path = (base_dir / project_path).resolve()
    else:
        project_path = sandbox_root / "Pods.xcodeproj"

    targets = []
    for target in toml_data.get("targets", []):
        label = target.get("label")
        if not label:
            raise ConfigurationError("Every [[targets]] entry needs a label")
        if "platform" not in target:
            raise ConfigurationError(f"Target '{label}' has no platform")
        modules = tuple(
            _load_module(m, base_dir, label) for m in target.get("modules", [])
        )
        targets.append(
            BuildTarget(
                label=label,
                platform=Platform.parse(target["platform"]),
                deployment_target=str(target.get("deployment_target", "")),
                modules=modules,
            )
        )

    return ProjectSnapshot(
        project_path=project_path,
        sandbox_root=sandbox_root,
        targets=tuple(targets),
    )
