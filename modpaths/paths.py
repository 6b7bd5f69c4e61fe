"""Per-module output directory layout and declared source directory checks.

Every ``module_*_dir`` function is a pure string computation rooted at
``module_out_dir``; none of them touch the filesystem. Only the two
``check_*_exist`` functions stat anything, and they only look at declared
source directories, never at output directories.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Iterable

from pydantic import BaseModel

from .config import BuildConfig
from .context import ModuleContext
from .diagnostics import Diagnostics
from .errors import ModPathsError, SourceTreeEscapeError

logger = logging.getLogger(__name__)

# layout field -> directory name under module_out_dir
OUTPUT_SUFFIXES: dict[str, str] = {
    "bin_dir": "bin",
    "lib_dir": "lib",
    "gen_dir": "gen",
    "obj_dir": "obj",
    "go_package_dir": "pkg",
    "include_dir": "include",
    "proto_dir": "proto",
    "js_compiled_dir": "js",
}


class ModuleLayout(BaseModel):
    module_name: str
    module_dir: str
    module_sub_dir: str
    src_dir: str
    out_dir: str
    bin_dir: str
    lib_dir: str
    gen_dir: str
    obj_dir: str
    go_package_dir: str
    include_dir: str
    proto_dir: str
    js_compiled_dir: str


def join_path(*elems: str) -> str:
    """Join non-empty elements with the separator and clean the result lexically.

    Unlike os.path.join, an absolute element does not discard what precedes it.
    """
    parts = [os.fspath(e) for e in elems if e]
    if not parts:
        return ""
    return os.path.normpath(os.sep.join(parts))


def module_out_dir(ctx: ModuleContext) -> str:
    """Root of everything built for this module variant."""
    return join_path(
        ctx.config.intermediates_root,
        ctx.module_dir,
        ctx.module_name,
        ctx.module_sub_dir,
    )


def module_src_dir(ctx: ModuleContext) -> str:
    """Directory that the module's declared source paths are relative to."""
    return join_path(ctx.config.source_root, ctx.module_dir)


def module_bin_dir(ctx: ModuleContext) -> str:
    return join_path(module_out_dir(ctx), OUTPUT_SUFFIXES["bin_dir"])


def module_lib_dir(ctx: ModuleContext) -> str:
    return join_path(module_out_dir(ctx), OUTPUT_SUFFIXES["lib_dir"])


def module_gen_dir(ctx: ModuleContext) -> str:
    """Directory for generated sources."""
    return join_path(module_out_dir(ctx), OUTPUT_SUFFIXES["gen_dir"])


def module_obj_dir(ctx: ModuleContext) -> str:
    return join_path(module_out_dir(ctx), OUTPUT_SUFFIXES["obj_dir"])


def module_go_package_dir(ctx: ModuleContext) -> str:
    """Package root: final package archives land here and dependents add it to -I."""
    return join_path(module_out_dir(ctx), OUTPUT_SUFFIXES["go_package_dir"])


def module_include_dir(ctx: ModuleContext) -> str:
    """Public include directory exported to dependents."""
    return join_path(module_out_dir(ctx), OUTPUT_SUFFIXES["include_dir"])


def module_proto_dir(ctx: ModuleContext) -> str:
    """Public proto include directory exported to dependents."""
    return join_path(module_out_dir(ctx), OUTPUT_SUFFIXES["proto_dir"])


def module_js_compiled_dir(ctx: ModuleContext) -> str:
    return join_path(module_out_dir(ctx), OUTPUT_SUFFIXES["js_compiled_dir"])


def module_layout(ctx: ModuleContext) -> ModuleLayout:
    """Collect every derived directory for one module."""
    return ModuleLayout(
        module_name=ctx.module_name,
        module_dir=ctx.module_dir,
        module_sub_dir=ctx.module_sub_dir,
        src_dir=module_src_dir(ctx),
        out_dir=module_out_dir(ctx),
        bin_dir=module_bin_dir(ctx),
        lib_dir=module_lib_dir(ctx),
        gen_dir=module_gen_dir(ctx),
        obj_dir=module_obj_dir(ctx),
        go_package_dir=module_go_package_dir(ctx),
        include_dir=module_include_dir(ctx),
        proto_dir=module_proto_dir(ctx),
        js_compiled_dir=module_js_compiled_dir(ctx),
    )


def _check_dirs_exist(
    base_dir: str,
    dirs: Iterable[str],
    property_name: str,
    missing_fmt: str,
    diagnostics: Diagnostics | None,
) -> Diagnostics:
    if isinstance(dirs, (str, bytes)):
        raise ModPathsError(
            "validation_error",
            f"{property_name}: expected a list of directories, got a single string.",
            details={property_name: os.fsdecode(dirs)},
        )
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    checked = 0
    failed = 0
    for rel_dir in dirs:
        checked += 1
        full_dir = join_path(base_dir, rel_dir)
        try:
            os.stat(full_dir)
        except FileNotFoundError:
            failed += 1
            logger.debug("%s: %s does not exist", property_name, full_dir)
            diagnostics.property_errorf(
                property_name,
                missing_fmt,
                json.dumps(rel_dir, ensure_ascii=False),
                code="source_dir_missing",
                directory=rel_dir,
            )
        except OSError as exc:
            failed += 1
            logger.debug("%s: stat %s failed: %s", property_name, full_dir, exc)
            diagnostics.property_errorf(
                property_name,
                "%s",
                str(exc),
                code="source_dir_unreadable",
                directory=rel_dir,
            )

    logger.info(
        "Checked %d %s directories under %s; %d failed.",
        checked,
        property_name,
        base_dir,
        failed,
    )
    return diagnostics


def check_module_src_dirs_exist(
    ctx: ModuleContext,
    dirs: Iterable[str],
    property_name: str,
    diagnostics: Diagnostics | None = None,
) -> Diagnostics:
    """Report every entry of ``dirs`` (relative to the module dir) that cannot be stat'ed.

    Errors are appended to ``diagnostics`` when given, otherwise to a new
    accumulator; the accumulator is returned either way.
    """
    return _check_dirs_exist(
        module_src_dir(ctx),
        dirs,
        property_name,
        "module source directory %s does not exist",
        diagnostics,
    )


def check_src_dirs_exist(
    ctx: ModuleContext,
    dirs: Iterable[str],
    property_name: str,
    diagnostics: Diagnostics | None = None,
) -> Diagnostics:
    """Like check_module_src_dirs_exist, but ``dirs`` are relative to the source root."""
    return _check_dirs_exist(
        ctx.config.source_root,
        dirs,
        property_name,
        "top-level source directory %s does not exist",
        diagnostics,
    )


def src_dir_rel_path(ctx: ModuleContext, path: str) -> str:
    """Return ``path`` relative to the source root.

    Raises SourceTreeEscapeError if ``path`` is not an absolute path lexically
    inside the source root.
    """
    return source_rel_path(ctx.config, path)


def source_rel_path(config: BuildConfig, path: str) -> str:
    """src_dir_rel_path for callers that have a build config but no module."""
    source_root = config.source_root
    path = os.fspath(path)
    if not os.path.isabs(path):
        raise SourceTreeEscapeError(path, source_root, "path is not absolute")

    try:
        rel_path = os.path.relpath(os.path.normpath(path), source_root)
    except ValueError as exc:
        raise SourceTreeEscapeError(path, source_root, str(exc)) from exc

    if rel_path == os.pardir or rel_path.startswith(os.pardir + os.sep):
        raise SourceTreeEscapeError(path, source_root)
    return rel_path
