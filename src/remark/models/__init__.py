"""Remark value types and configuration models."""

from .config import ConversionConfig, FetchConfig, FetchMethod, RemarkConfig
from .content import Link, Media, MediaKind, Section

__all__ = [
    # Config
    "ConversionConfig",
    "FetchConfig",
    "FetchMethod",
    "RemarkConfig",
    # Content
    "Link",
    "Media",
    "MediaKind",
    "Section",
]
