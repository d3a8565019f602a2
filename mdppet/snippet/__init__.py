"""Snippet entries and the document that collects them."""

from .model import SnippetDocument, SnippetEntry

__all__ = ["SnippetDocument", "SnippetEntry"]
