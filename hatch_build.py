"""Hatchling hook that stamps gridtext/_build_info.py with git metadata."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

from hatchling.builders.hooks.plugin.interface import BuildHookInterface

BUILD_INFO_PATH = "gridtext/_build_info.py"


def _git(args: list[str], cwd: Path) -> str | None:
    try:
        out = subprocess.check_output(["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL)
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        # No git checkout, e.g. an sdist build
        return None
    return out.decode().strip() or None


class CustomBuildHook(BuildHookInterface):
    """Records HEAD's commit and date for ``gridtext --version``."""

    def initialize(self, version: str, build_data: dict[str, Any]) -> None:
        root = Path(self.root)
        commit = _git(["rev-parse", "HEAD"], cwd=root)
        date = _git(["show", "-s", "--format=%cI", "HEAD"], cwd=root)
        (root / BUILD_INFO_PATH).write_text(
            "# Written by hatch_build.py; do not edit.\n"
            f"COMMIT = {commit!r}\n"
            f"DATE = {date!r}\n",
            encoding="utf-8",
        )
        build_data.setdefault("artifacts", []).append(BUILD_INFO_PATH)
