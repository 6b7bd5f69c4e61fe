"""Accumulated property errors produced by source-directory validation."""

from __future__ import annotations

from pydantic import BaseModel, Field


class PropertyError(BaseModel):
    property_name: str
    message: str
    code: str = "validation_error"
    directory: str | None = None


class Diagnostics(BaseModel):
    """Collects every property error from one or more validation passes.

    Validation never stops at the first failure; callers inspect ``ok`` once
    all checks have run and merge the result into their own report.
    """

    errors: list[PropertyError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def property_errorf(
        self,
        property_name: str,
        fmt: str,
        *args: object,
        code: str = "validation_error",
        directory: str | None = None,
    ) -> PropertyError:
        message = fmt % args if args else fmt
        error = PropertyError(
            property_name=property_name,
            message=message,
            code=code,
            directory=directory,
        )
        self.errors.append(error)
        return error

    def merge(self, other: Diagnostics) -> Diagnostics:
        self.errors.extend(other.errors)
        return self

    def for_property(self, property_name: str) -> list[PropertyError]:
        return [e for e in self.errors if e.property_name == property_name]

    def to_dict(self) -> dict:
        return {"ok": self.ok, "errors": [e.model_dump() for e in self.errors]}
