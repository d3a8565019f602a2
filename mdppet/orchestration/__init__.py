"""Conversion pipeline helpers."""

from .conversion import ConversionPipeline

__all__ = ["ConversionPipeline"]
