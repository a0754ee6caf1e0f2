"""Schema-stamped JSON output for CLI commands.

Every ``--json`` payload carries ``schema_id``, ``schema_version``,
``producer`` and ``produced_at`` so downstream tooling can detect format
changes.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from memzip import __version__


@dataclass(frozen=True, slots=True)
class SchemaStamp:
    """Schema metadata applied to emitted payloads."""

    schema_id: str
    schema_version: int
    producer: str
    produced_at: str


def build_schema_stamp(
    *,
    schema_id: str,
    schema_version: int,
    producer: str | None = None,
    produced_at: str | None = None,
) -> SchemaStamp:
    """Construct a :class:`SchemaStamp` for reuse across writers."""

    return SchemaStamp(
        schema_id=schema_id,
        schema_version=schema_version,
        producer=producer or f"memzip-{__version__}",
        produced_at=produced_at or datetime.now(UTC).isoformat(),
    )


def json_response(
    schema_id: str,
    schema_version: int,
    **data: Any,
) -> str:
    """Create schema-wrapped JSON response for CLI output.

    Example:
        >>> json_response("archive_entries", 1, entries=[])
        {
          "schema_id": "archive_entries",
          "schema_version": 1,
          "producer": "memzip-0.1.0",
          "produced_at": "2026-10-19T10:30:00+00:00",
          "entries": []
        }
    """
    stamp = build_schema_stamp(schema_id=schema_id, schema_version=schema_version)
    wrapped = {
        "schema_id": stamp.schema_id,
        "schema_version": stamp.schema_version,
        "producer": stamp.producer,
        "produced_at": stamp.produced_at,
        **data,
    }
    return json.dumps(wrapped, indent=2, default=str)
