import logging
import traceback
from typing import Dict, Any, List
from pathlib import Path

from .errors import MalformedRecord, MdppetError, UnterminatedFence, ValidationError


class ErrorHandler:
    """Centralized error handling and logging for snippet conversion."""

    def __init__(self, log_level: str = "WARNING"):
        self.logger = self._setup_logging(log_level)
        self.errors: List[Dict[str, Any]] = []

    def _setup_logging(self, level: str) -> logging.Logger:
        """Configure structured logging."""
        logger = logging.getLogger("mdppet")
        logger.setLevel(getattr(logging, level.upper()))

        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        return logger

    def handle_error(self, error: Exception, context: Dict[str, Any]) -> Dict[str, Any]:
        """Record an error with context; the caller presents it to the user."""
        error_info = {
            "type": type(error).__name__,
            "message": str(error),
            "context": context,
            "traceback": traceback.format_exc() if self.logger.level <= logging.DEBUG else None
        }

        self.logger.debug(
            f"{error_info['type']}: {error_info['message']} | Context: {context}"
        )

        self.errors.append(error_info)

        return error_info

    def collect_conversion_error(self, error: MdppetError) -> Dict[str, Any]:
        """Collect a scan or validation error with its line positions."""
        context: Dict[str, Any] = {"source": error.source or "unknown"}
        if isinstance(error, (MalformedRecord, UnterminatedFence)):
            context["line"] = error.line
        elif isinstance(error, ValidationError):
            context["identifier"] = error.identifier
            context["lines"] = [error.first_line, error.second_line]
        return self.handle_error(error, context)

    def collect_file_error(self, error: Exception, file_path: str, operation: str) -> Dict[str, Any]:
        """Collect file operation error with context."""
        context = {
            "source": file_path,
            "operation": operation,
            "file_name": Path(file_path).name if file_path else "unknown"
        }
        return self.handle_error(error, context)

    def get_error_summary(self) -> Dict[str, Any]:
        """Generate summary of all collected errors."""
        if not self.errors:
            return {"total_errors": 0, "error_types": {}, "failed_sources": []}

        error_types: Dict[str, int] = {}
        failed_sources = []

        for error in self.errors:
            error_type = error["type"]
            error_types[error_type] = error_types.get(error_type, 0) + 1
            context = error.get("context", {})
            failed_sources.append({
                "source": context.get("source", "unknown"),
                "error": error["message"],
            })

        return {
            "total_errors": len(self.errors),
            "error_types": error_types,
            "failed_sources": failed_sources
        }

    def clear_errors(self):
        """Clear collected errors."""
        self.errors.clear()

    def format_error_report(self) -> str:
        """Format user-friendly error report."""
        summary = self.get_error_summary()

        if summary["total_errors"] == 0:
            return ""

        lines = []
        for failure in summary["failed_sources"][:5]:
            lines.append(f"Error: {failure['error']}")

        if len(summary["failed_sources"]) > 5:
            lines.append(f"  ... and {len(summary['failed_sources']) - 5} more")

        return "\n".join(lines)
