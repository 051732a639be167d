"""
app/validators/mapping_validator.py

Validation for header-to-canonical field resolution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence


@dataclass(frozen=True)
class MappingErrorDetail:
    """
    Structured mapping error detail.
    """

    code: str
    message: str
    canonical_field: str | None = None
    source_column: str | None = None
    context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "canonical_field": self.canonical_field,
            "source_column": self.source_column,
            "context": self.context,
        }


class SchemaMappingError(ValueError):
    """
    Raised when a header row cannot be resolved into canonical fields.
    """

    def __init__(self, *, message: str, errors: Sequence[MappingErrorDetail]) -> None:
        super().__init__(message)
        self.message = message
        self.errors = tuple(errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "errors": [error.to_dict() for error in self.errors],
        }


class MappingValidator:
    """
    Validates resolved canonical-to-header mappings.

    A row is accepted as a header when at least ``min_resolved_fields``
    canonical fields were recognized in it.
    """

    def __init__(self, *, min_resolved_fields: int = 1) -> None:
        self._min_resolved_fields = max(0, min_resolved_fields)

    def collect_errors(
        self,
        *,
        mapping: dict[str, str],
        source_headers: Sequence[str],
    ) -> list[MappingErrorDetail]:
        """
        Return every problem with *mapping* without raising.
        """

        errors: list[MappingErrorDetail] = []
        if len(mapping) < self._min_resolved_fields:
            errors.append(
                MappingErrorDetail(
                    code="header_not_recognized",
                    message=(
                        f"Only {len(mapping)} column(s) matched a known field; "
                        f"at least {self._min_resolved_fields} are needed."
                    ),
                    context={"source_headers": list(source_headers)},
                )
            )

        return errors

    def validate(
        self,
        *,
        mapping: dict[str, str],
        source_headers: Sequence[str],
        pre_errors: Sequence[MappingErrorDetail] | None = None,
    ) -> None:
        """
        Validate mapping and raise structured errors if invalid.
        """

        errors = list(pre_errors or [])
        errors.extend(self.collect_errors(mapping=mapping, source_headers=source_headers))
        if not errors:
            return

        codes = ", ".join(sorted({error.code for error in errors}))
        raise SchemaMappingError(
            message=f"Header mapping validation failed: {codes}.",
            errors=errors,
        )
