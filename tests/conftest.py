from __future__ import annotations

import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from modpaths.config import BuildConfig  # noqa: E402
from modpaths.context import ModuleContext  # noqa: E402


@pytest.fixture
def build_config(tmp_path: Path) -> BuildConfig:
    src = tmp_path / "src"
    src.mkdir()
    out = tmp_path / "out"
    return BuildConfig(
        source_root=str(src),
        build_dir=str(out),
        intermediates_root=str(out / ".intermediates"),
    )


@pytest.fixture
def module_ctx(build_config: BuildConfig) -> ModuleContext:
    return ModuleContext(
        module_dir="frameworks/base",
        module_name="libfoo",
        module_sub_dir="linux_x86_64",
        config=build_config,
    )
