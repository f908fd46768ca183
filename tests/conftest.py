"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import pytest

from podrome.utils.apple.project import BuildTarget, ModuleDescriptor, ProjectSnapshot


class FakeXcodebuild:
    """Command runner standing in for xcodebuild.

    Build invocations create the framework products listed in `products`
    for the SDK they target; -create-xcframework invocations create the
    output bundle with an Info.plist listing its input frameworks.
    """

    def __init__(
        self,
        build_dir: Path,
        configuration: str = "Debug",
        products: Optional[Dict[str, Sequence[Tuple[str, str]]]] = None,
        fail_on: Optional[Callable[[List[str]], bool]] = None,
        dsyms: bool = False,
    ) -> None:
        self.build_dir = build_dir
        self.configuration = configuration
        self.products = products or {}
        self.fail_on = fail_on
        self.dsyms = dsyms
        self.calls: List[List[str]] = []

    @staticmethod
    def sdk_of(command: List[str]) -> str:
        if "-sdk" in command:
            return command[command.index("-sdk") + 1]
        return "maccatalyst"

    def builds(self) -> List[List[str]]:
        return [c for c in self.calls if "-create-xcframework" not in c]

    def xcframework_calls(self) -> List[List[str]]:
        return [c for c in self.calls if "-create-xcframework" in c]

    def __call__(self, command, cwd=None):
        command = list(command)
        self.calls.append(command)
        if self.fail_on is not None and self.fail_on(command):
            return 65, "error: no such module\n** BUILD FAILED **\n"

        if "-create-xcframework" in command:
            output = Path(command[command.index("-output") + 1])
            output.mkdir(parents=True)
            inputs = [command[i + 1] for i, arg in enumerate(command) if arg == "-framework"]
            (output / "Info.plist").write_text("\n".join(inputs), encoding="utf-8")
            return 0, ""

        sdk = self.sdk_of(command)
        sdk_dir = self.build_dir / f"{self.configuration}-{sdk}"
        sdk_dir.mkdir(parents=True, exist_ok=True)
        for package, module in self.products.get(sdk, []):
            framework = sdk_dir / package / f"{module}.framework"
            framework.mkdir(parents=True, exist_ok=True)
            (framework / "Info.plist").write_text(sdk, encoding="utf-8")
            (framework / module).write_text(f"{module}-{sdk}", encoding="utf-8")
            if self.dsyms:
                dsym = sdk_dir / package / f"{module}.framework.dSYM"
                (dsym / "Contents").mkdir(parents=True, exist_ok=True)
                (dsym / "Contents" / "Info.plist").write_text(sdk, encoding="utf-8")
        return 0, "** BUILD SUCCEEDED **\n"


def make_target(
    label: str,
    platform: str = "ios",
    modules: Sequence[Tuple[str, str]] = (),
    **extras,
) -> BuildTarget:
    return BuildTarget(
        label=label,
        platform=platform,
        deployment_target="13.0",
        modules=tuple(ModuleDescriptor(p, m, **extras) for p, m in modules),
    )


@pytest.fixture
def sandbox(tmp_path: Path) -> Path:
    root = tmp_path / "Pods"
    (root / "Pods.xcodeproj").mkdir(parents=True)
    return root


@pytest.fixture
def snapshot_factory(sandbox: Path) -> Callable[..., ProjectSnapshot]:
    def factory(*targets: BuildTarget) -> ProjectSnapshot:
        return ProjectSnapshot(
            project_path=sandbox / "Pods.xcodeproj",
            sandbox_root=sandbox,
            targets=tuple(targets),
        )

    return factory


@pytest.fixture
def build_dir(sandbox: Path) -> Path:
    return sandbox.parent / "build"
