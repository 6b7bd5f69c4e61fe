"""modpaths command-line interface."""

from __future__ import annotations

import json
from typing import NoReturn

import click

from .config import resolve_config
from .context import ModuleContext
from .errors import map_exception
from .log import configure_logging
from .paths import check_module_src_dirs_exist, check_src_dirs_exist, module_layout, source_rel_path


def _emit_error_and_exit(exc: Exception) -> NoReturn:
    err = map_exception(exc)
    click.echo(json.dumps({"error": err.to_dict()}, indent=2), err=True)
    raise SystemExit(err.exit_code)


def _module_context(obj: dict, module_dir: str, name: str, sub_dir: str) -> ModuleContext:
    cfg = resolve_config(**obj)
    return ModuleContext(
        module_dir=module_dir,
        module_name=name,
        module_sub_dir=sub_dir,
        config=cfg,
    )


module_options = [
    click.option("--module-dir", default="", help="Module directory relative to the source root."),
    click.option("--name", "name", required=True, type=str, help="Module name."),
    click.option("--sub-dir", default="", help="Variant subdirectory (architecture, flavor)."),
]


def _with_module_options(func):
    for option in reversed(module_options):
        func = option(func)
    return func


@click.group()
@click.option("--src-dir", default=None, help="Top of the source tree (env: MODPATHS_SRC_DIR).")
@click.option("--build-dir", default=None, help="Build output directory (env: MODPATHS_BUILD_DIR).")
@click.option(
    "--intermediates-dir",
    default=None,
    help="Per-module intermediates root (env: MODPATHS_INTERMEDIATES_DIR).",
)
@click.option("--log-level", default=None, help="Logging level (env: MODPATHS_LOG_LEVEL).")
@click.pass_context
def cli(
    ctx: click.Context,
    src_dir: str | None,
    build_dir: str | None,
    intermediates_dir: str | None,
    log_level: str | None,
) -> None:
    """Module output layout and source directory checks."""
    try:
        configure_logging(log_level)
    except Exception as exc:  # noqa: BLE001
        _emit_error_and_exit(exc)
    ctx.obj = {
        "src_dir": src_dir,
        "build_dir": build_dir,
        "intermediates_dir": intermediates_dir,
    }


@cli.command("layout")
@_with_module_options
@click.pass_obj
def layout(obj: dict, module_dir: str, name: str, sub_dir: str) -> None:
    """Print every derived output directory for one module."""
    try:
        module = _module_context(obj, module_dir, name, sub_dir)
        click.echo(json.dumps(module_layout(module).model_dump(), indent=2))
    except Exception as exc:  # noqa: BLE001
        _emit_error_and_exit(exc)


@cli.command("check")
@_with_module_options
@click.option("--property", "property_name", required=True, type=str, help="Property the directories were declared on.")
@click.option("--dir", "dirs", multiple=True, help="Declared directory; repeat for several.")
@click.option(
    "--top-level",
    is_flag=True,
    default=False,
    help="Resolve directories against the source root instead of the module directory.",
)
@click.pass_obj
def check(
    obj: dict,
    module_dir: str,
    name: str,
    sub_dir: str,
    property_name: str,
    dirs: tuple[str, ...],
    top_level: bool,
) -> None:
    """Verify that declared source directories exist."""
    try:
        module = _module_context(obj, module_dir, name, sub_dir)
        checker = check_src_dirs_exist if top_level else check_module_src_dirs_exist
        diagnostics = checker(module, list(dirs), property_name)
    except Exception as exc:  # noqa: BLE001
        _emit_error_and_exit(exc)

    click.echo(json.dumps(diagnostics.to_dict(), indent=2))
    if not diagnostics.ok:
        click.echo(f"{len(diagnostics.errors)} directory errors on '{property_name}'.", err=True)
        raise SystemExit(1)


@cli.command("relpath")
@click.argument("path", type=str)
@click.pass_obj
def relpath(obj: dict, path: str) -> None:
    """Print PATH relative to the source root."""
    try:
        cfg = resolve_config(**obj)
        click.echo(source_rel_path(cfg, path))
    except Exception as exc:  # noqa: BLE001
        _emit_error_and_exit(exc)
