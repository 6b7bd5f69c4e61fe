"""Module identity as seen by path derivation."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .config import BuildConfig
from .errors import ModPathsError


def _validate_relative_dir(field_name: str, value: str) -> None:
    """Reject values that would move a joined path above its root."""
    if os.path.isabs(value):
        raise ModPathsError(
            "validation_error",
            f"{field_name} must be relative to its root.",
            details={field_name: value},
        )
    if not value:
        return
    cleaned = os.path.normpath(value)
    if cleaned == os.pardir or cleaned.startswith(os.pardir + os.sep):
        raise ModPathsError(
            "validation_error",
            f"{field_name} must not climb above its root.",
            details={field_name: value},
        )


def _validate_module_name(name: str) -> None:
    if not name or not name.strip():
        raise ModPathsError("validation_error", "Module name must be a non-empty string.")
    if name in (os.curdir, os.pardir) or os.path.basename(name) != name or "/" in name:
        raise ModPathsError(
            "validation_error",
            "Module name must be a single path segment.",
            details={"module_name": name},
        )


@dataclass(frozen=True)
class ModuleContext:
    """Read-only view of one module: where it is declared and which variant is built.

    ``module_dir`` is relative to the source root; ``module_sub_dir`` is the
    variant discriminator (architecture, flavor) and may be empty. Neither may
    climb out of its root, and ``module_name`` is a single path segment.
    """

    module_dir: str
    module_name: str
    module_sub_dir: str
    config: BuildConfig

    def __post_init__(self) -> None:
        _validate_module_name(self.module_name)
        _validate_relative_dir("module_dir", self.module_dir)
        _validate_relative_dir("module_sub_dir", self.module_sub_dir)
