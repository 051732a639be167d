"""
app/mappers/schema_mapper.py

Header mapping engine for tracker exports (Rally, Jira, ServiceNow, ...).

Each tracker names its columns differently ("Defect Type", "defectType",
"Category", "Issue Type"). The mapper resolves one canonical field name per
logical attribute so that everything downstream reads canonical names only.

Resolution order
----------------
1. Manual overrides (``{canonical_field: header}``).
2. Exact or alias match on the normalized header.
3. Fuzzy match (difflib ratio, or containment for tokens of four or more
   characters) among the headers still unclaimed.
"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import SequenceMatcher
from typing import Mapping, Sequence

from app.validators.mapping_validator import MappingErrorDetail, MappingValidator, SchemaMappingError

CANONICAL_FIELDS: tuple[str, ...] = (
    "id",
    "title",
    "description",
    "date",
    "resolved_date",
    "severity",
    "status",
    "priority",
    "source",
    "defect_type",
    "lob",
)

MIN_RESOLVED_FIELDS = 2

DEFAULT_COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("defect id", "incident id", "issue id", "issue key", "key", "number", "formatted id"),
    "title": ("short description", "summary", "name", "test case name", "subject"),
    "description": ("defect description", "long description", "details"),
    "date": (
        "created",
        "created date",
        "creation date",
        "opened",
        "opened date",
        "opened at",
        "execution date",
        "reported date",
    ),
    "resolved_date": (
        "resolved",
        "resolved at",
        "resolution date",
        "resolutiondate",
        "closed date",
        "closed at",
    ),
    "severity": ("sev", "defect severity", "impact severity"),
    "status": ("state", "defect status", "schedule state"),
    "priority": ("prio", "defect priority", "urgency"),
    "source": ("source system", "tracker", "tool", "system"),
    "defect_type": ("type", "defect category", "issue type", "category", "failure type"),
    "lob": ("line of business", "business unit", "business line"),
}


def normalize_header(header: str) -> str:
    """
    Normalize a column name for case- and punctuation-tolerant matching.
    """

    return "".join(ch for ch in header.strip().lower() if ch.isalnum())


@dataclass(frozen=True)
class MappingResolution:
    """
    Final resolved mapping metadata.
    """

    canonical_to_source: dict[str, str]
    canonical_to_index: dict[str, int]
    source_headers: tuple[str, ...]
    match_strategies: dict[str, str]


class SchemaMapper:
    """
    Resolves tracker header rows into canonical field mappings.
    """

    def __init__(
        self,
        *,
        aliases: Mapping[str, Sequence[str]] | None = None,
        validator: MappingValidator | None = None,
        fuzzy_threshold: float = 0.84,
    ) -> None:
        self._aliases: dict[str, tuple[str, ...]] = {
            canonical: tuple(values)
            for canonical, values in (aliases or DEFAULT_COLUMN_ALIASES).items()
        }
        self._validator = validator or MappingValidator(min_resolved_fields=MIN_RESOLVED_FIELDS)
        self._fuzzy_threshold = max(0.0, min(1.0, fuzzy_threshold))

    def resolve_mapping(
        self,
        headers: Sequence[str],
        *,
        manual_overrides: Mapping[str, str] | None = None,
    ) -> MappingResolution:
        """
        Resolve canonical-to-header mapping from *headers* and optional overrides.

        Raises :class:`SchemaMappingError` when the row does not look like a
        header (too few recognized columns) or an override is invalid.
        """

        source_headers = tuple(header.strip() for header in headers)
        header_index: dict[str, int] = {}
        normalized_lookup: dict[str, str] = {}
        for index, header in enumerate(source_headers):
            normalized = normalize_header(header)
            if not normalized or normalized in normalized_lookup:
                continue
            normalized_lookup[normalized] = header
            header_index[header] = index

        if not normalized_lookup:
            raise SchemaMappingError(
                message="Header row is empty; cannot resolve field mapping.",
                errors=[
                    MappingErrorDetail(
                        code="empty_headers",
                        message="No non-blank header cells were found.",
                    )
                ],
            )

        resolved: dict[str, str] = {}
        strategies: dict[str, str] = {}
        mapping_errors: list[MappingErrorDetail] = []

        for canonical_field, source_column in (manual_overrides or {}).items():
            canonical = canonical_field.strip()
            if canonical not in CANONICAL_FIELDS:
                mapping_errors.append(
                    MappingErrorDetail(
                        code="invalid_override_field",
                        message="Manual override contains unknown canonical field.",
                        canonical_field=canonical,
                        source_column=source_column,
                    )
                )
                continue

            matched = normalized_lookup.get(normalize_header(source_column))
            if matched is None:
                mapping_errors.append(
                    MappingErrorDetail(
                        code="override_source_not_found",
                        message="Manual override points to a column not present in the header row.",
                        canonical_field=canonical,
                        source_column=source_column,
                        context={"source_headers": list(source_headers)},
                    )
                )
                continue

            resolved[canonical] = matched
            strategies[canonical] = "override"

        used_headers = set(resolved.values())
        for canonical_field in CANONICAL_FIELDS:
            if canonical_field in resolved:
                continue
            exact = self._find_exact_or_alias_match(canonical_field, normalized_lookup, used_headers)
            if exact is not None:
                resolved[canonical_field] = exact
                strategies[canonical_field] = "exact_or_alias"
                used_headers.add(exact)

        for canonical_field in CANONICAL_FIELDS:
            if canonical_field in resolved:
                continue
            fuzzy = self._find_best_fuzzy_match(canonical_field, normalized_lookup, used_headers)
            if fuzzy is not None:
                resolved[canonical_field] = fuzzy
                strategies[canonical_field] = "fuzzy"
                used_headers.add(fuzzy)

        self._validator.validate(
            mapping=resolved,
            source_headers=source_headers,
            pre_errors=mapping_errors,
        )

        return MappingResolution(
            canonical_to_source=resolved,
            canonical_to_index={field: header_index[header] for field, header in resolved.items()},
            source_headers=source_headers,
            match_strategies=strategies,
        )

    @staticmethod
    def map_row(
        *,
        raw_row: Sequence[str],
        mapping: MappingResolution,
    ) -> dict[str, str | None]:
        """
        Map one positional data row into canonical raw field values.
        """

        return {
            canonical_field: raw_row[index] if index < len(raw_row) else None
            for canonical_field, index in mapping.canonical_to_index.items()
        }

    def _find_exact_or_alias_match(
        self,
        canonical_field: str,
        normalized_lookup: Mapping[str, str],
        used_headers: set[str],
    ) -> str | None:
        for candidate in (canonical_field, *self._aliases.get(canonical_field, ())):
            match = normalized_lookup.get(normalize_header(candidate))
            if match and match not in used_headers:
                return match
        return None

    def _find_best_fuzzy_match(
        self,
        canonical_field: str,
        normalized_lookup: Mapping[str, str],
        used_headers: set[str],
    ) -> str | None:
        candidates = [
            normalize_header(item)
            for item in (canonical_field, *self._aliases.get(canonical_field, ()))
        ]
        candidates = [item for item in candidates if item]

        best_header: str | None = None
        best_score = 0.0
        for header_norm, header_raw in normalized_lookup.items():
            if header_raw in used_headers:
                continue
            for candidate in candidates:
                score = SequenceMatcher(None, header_norm, candidate).ratio()
                if min(len(candidate), len(header_norm)) >= 4 and (
                    header_norm in candidate or candidate in header_norm
                ):
                    score = max(score, 0.9)
                if score > best_score:
                    best_score = score
                    best_header = header_raw

        if best_header is not None and best_score >= self._fuzzy_threshold:
            return best_header
        return None
