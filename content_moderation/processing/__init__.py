"""Media processing pipeline."""

from content_moderation.processing.processor import MediaProcessor, ProcessingResult

__all__ = ["MediaProcessor", "ProcessingResult"]
