from __future__ import annotations

import os
from pathlib import Path

import pytest

from modpaths.config import resolve_config
from modpaths.errors import ModPathsError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("MODPATHS_SRC_DIR", "MODPATHS_BUILD_DIR", "MODPATHS_INTERMEDIATES_DIR"):
        monkeypatch.delenv(name, raising=False)


def test_defaults_follow_source_root(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    cfg = resolve_config()
    assert cfg.source_root == os.getcwd()
    assert cfg.build_dir == os.path.join(cfg.source_root, "out")
    assert cfg.intermediates_root == os.path.join(cfg.source_root, "out", ".intermediates")


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MODPATHS_SRC_DIR", str(tmp_path / "src"))
    monkeypatch.setenv("MODPATHS_BUILD_DIR", str(tmp_path / "build"))

    cfg = resolve_config()
    assert cfg.source_root == str(tmp_path / "src")
    assert cfg.build_dir == str(tmp_path / "build")
    assert cfg.intermediates_root == str(tmp_path / "build" / ".intermediates")


def test_arguments_beat_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MODPATHS_INTERMEDIATES_DIR", str(tmp_path / "env-int"))
    cfg = resolve_config(src_dir=tmp_path, intermediates_dir=tmp_path / "arg-int")
    assert cfg.intermediates_root == str(tmp_path / "arg-int")


def test_relative_values_become_absolute(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    cfg = resolve_config(src_dir="tree/./src", build_dir="build/../out")
    assert cfg.source_root == os.path.join(os.getcwd(), "tree", "src")
    assert cfg.build_dir == os.path.join(os.getcwd(), "out")


def test_resolution_creates_nothing(tmp_path: Path) -> None:
    resolve_config(src_dir=tmp_path / "src")
    assert list(tmp_path.iterdir()) == []


def test_empty_value_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MODPATHS_SRC_DIR", "")
    with pytest.raises(ModPathsError) as exc:
        resolve_config()
    assert exc.value.code == "config_error"
