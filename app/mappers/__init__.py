"""
app/mappers package marker.
"""

from app.mappers.schema_mapper import (
    CANONICAL_FIELDS,
    DEFAULT_COLUMN_ALIASES,
    MappingResolution,
    SchemaMapper,
    normalize_header,
)

__all__ = [
    "CANONICAL_FIELDS",
    "DEFAULT_COLUMN_ALIASES",
    "MappingResolution",
    "SchemaMapper",
    "normalize_header",
]
