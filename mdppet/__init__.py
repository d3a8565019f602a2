"""Convert markdown snippet documents into editor snippet JSON."""

from .config import OutputConfig, ScannerConfig
from .errors import MalformedRecord, MdppetError, UnterminatedFence, ValidationError
from .markdown import RawRecord, emit_records, render_json, scan_lines, scan_text
from .orchestration import ConversionPipeline
from .snippet import SnippetDocument, SnippetEntry
from .utils import FileData, FileInfo, FileLoader

__version__ = "0.1.0"

__all__ = [
    "ConversionPipeline",
    "FileData",
    "FileInfo",
    "FileLoader",
    "MalformedRecord",
    "MdppetError",
    "OutputConfig",
    "RawRecord",
    "ScannerConfig",
    "SnippetDocument",
    "SnippetEntry",
    "UnterminatedFence",
    "ValidationError",
    "emit_records",
    "render_json",
    "scan_lines",
    "scan_text",
]
