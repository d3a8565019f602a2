"""Markdown snippet scanning and JSON emission."""

from .emitter import emit_records, render_json
from .scanner import RawRecord, RecordScanner, ScanState, scan_lines, scan_text

__all__ = [
    "RawRecord",
    "RecordScanner",
    "ScanState",
    "scan_lines",
    "scan_text",
    "emit_records",
    "render_json",
]
