"""Build configuration resolution."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .errors import ModPathsError

logger = logging.getLogger(__name__)

DEFAULT_BUILD_SUBDIR = "out"
INTERMEDIATES_SUBDIR = ".intermediates"


@dataclass(frozen=True)
class BuildConfig:
    """Global roots shared by every module in one build invocation.

    All fields are absolute, lexically cleaned path strings.
    """

    source_root: str
    build_dir: str
    intermediates_root: str


def _absolute(value: str | os.PathLike, env_name: str) -> str:
    text = os.fspath(value)
    if not text or not text.strip():
        raise ModPathsError(
            "config_error",
            f"{env_name} must not be empty.",
            details={env_name: text},
        )
    return os.path.abspath(Path(text).expanduser())


def _pick(explicit: str | os.PathLike | None, env_name: str) -> str | os.PathLike | None:
    if explicit is not None:
        return explicit
    return os.environ.get(env_name)


def resolve_config(
    *,
    src_dir: str | os.PathLike | None = None,
    build_dir: str | os.PathLike | None = None,
    intermediates_dir: str | os.PathLike | None = None,
) -> BuildConfig:
    """Resolve build roots from arguments, then environment, then defaults.

    Nothing is created or probed on disk.
    """
    raw_src = _pick(src_dir, "MODPATHS_SRC_DIR")
    source_root = _absolute(raw_src if raw_src is not None else Path.cwd(), "MODPATHS_SRC_DIR")

    raw_build = _pick(build_dir, "MODPATHS_BUILD_DIR")
    if raw_build is None:
        raw_build = os.path.join(source_root, DEFAULT_BUILD_SUBDIR)
    resolved_build = _absolute(raw_build, "MODPATHS_BUILD_DIR")

    raw_intermediates = _pick(intermediates_dir, "MODPATHS_INTERMEDIATES_DIR")
    if raw_intermediates is None:
        raw_intermediates = os.path.join(resolved_build, INTERMEDIATES_SUBDIR)
    intermediates_root = _absolute(raw_intermediates, "MODPATHS_INTERMEDIATES_DIR")

    cfg = BuildConfig(
        source_root=source_root,
        build_dir=resolved_build,
        intermediates_root=intermediates_root,
    )

    logger.info("MODPATHS_SRC_DIR=%s", cfg.source_root)
    logger.info("MODPATHS_BUILD_DIR=%s", cfg.build_dir)
    logger.info("MODPATHS_INTERMEDIATES_DIR=%s", cfg.intermediates_root)

    return cfg
