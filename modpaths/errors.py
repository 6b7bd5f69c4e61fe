"""Error taxonomy and mapping for modpaths."""

from __future__ import annotations

import json
from dataclasses import dataclass

ERROR_EXIT_CODE: dict[str, int] = {
    "validation_error": 2,
    "config_error": 2,
    "source_dir_missing": 1,
    "source_dir_unreadable": 1,
    "path_outside_source_root": 3,
    "internal_error": 2,
}


@dataclass
class ModPathsError(Exception):
    """Typed error that carries stable code + caller-facing metadata."""

    code: str
    message: str
    details: dict | list | str | None = None

    def __str__(self) -> str:
        return self.message

    @property
    def exit_code(self) -> int:
        return ERROR_EXIT_CODE.get(self.code, 2)

    def to_dict(self) -> dict:
        payload = {"code": self.code, "message": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class SourceTreeEscapeError(ModPathsError):
    """A path handed to a source-relative operation is not under the source root.

    This is a caller defect, not a configuration mistake, so it is raised
    instead of being recorded in a Diagnostics accumulator.
    """

    def __init__(self, path: str, source_root: str, reason: str | None = None):
        message = f"{json.dumps(path, ensure_ascii=False)} is not inside {json.dumps(source_root, ensure_ascii=False)}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            "path_outside_source_root",
            message,
            details={"path": path, "source_root": source_root},
        )


def map_exception(exc: Exception) -> ModPathsError:
    """Map an arbitrary exception into a stable taxonomy code."""
    if isinstance(exc, ModPathsError):
        return exc

    msg = str(exc)
    if isinstance(exc, ValueError):
        return ModPathsError("validation_error", msg)
    if isinstance(exc, FileNotFoundError):
        return ModPathsError("source_dir_missing", msg)
    if isinstance(exc, OSError):
        return ModPathsError("source_dir_unreadable", msg)

    return ModPathsError("internal_error", msg or exc.__class__.__name__)
