"""Turn scanned records into a snippet document and its JSON text."""
from __future__ import annotations

import json
import logging
from typing import Dict, Iterable

from ..config import OutputConfig
from ..errors import ValidationError
from ..snippet import SnippetDocument, SnippetEntry
from .scanner import RawRecord

logger = logging.getLogger("mdppet")


def emit_records(records: Iterable[RawRecord]) -> SnippetDocument:
    """Build a document from records, failing on the first duplicate identifier."""
    document = SnippetDocument({})
    seen: Dict[str, RawRecord] = {}

    for record in records:
        first = seen.get(record.identifier)
        if first is not None:
            raise ValidationError(
                record.identifier,
                first.line,
                record.line,
                source=record.source,
                first_source=first.source if first.source != record.source else None,
            )
        seen[record.identifier] = record
        document.add(
            SnippetEntry(
                identifier=record.identifier,
                prefix=record.prefix,
                scope=record.scope,
                body=list(record.body_lines),
                description=list(record.description_lines),
            )
        )

    logger.debug("Emitted %d snippet entries", len(document))
    return document


def render_json(document: SnippetDocument, config: OutputConfig | None = None) -> str:
    """Serialize ``document``; no trailing newline."""
    config = config or OutputConfig()
    payload = document.to_json_dict()
    if config.indent is None:
        return json.dumps(payload, ensure_ascii=config.ensure_ascii, separators=(",", ":"))
    return json.dumps(payload, ensure_ascii=config.ensure_ascii, indent=config.indent)


__all__ = ["emit_records", "render_json"]
