"""
Content extraction and manifest package.

Public API:
- is_candidate_text: classify a raw string as editor-facing text
- RegexSourceScanner / scan_directory: candidate extraction from UI sources
- PageAssembler: per-file page building with stable ids
- ManifestWriter / order_pages / build_sitemap: persistence and navigation
- ContentStore: runtime lookup with fallbacks
- ContentService: one full extraction run
"""

from __future__ import annotations

from forsaj.content.assembler import PageAssembler
from forsaj.content.classifier import is_candidate_text
from forsaj.content.manifest import ManifestWriter, build_sitemap, compute_stats, order_pages
from forsaj.content.models import (
    ExtractionStats,
    ImageOrigin,
    ImageRef,
    Page,
    SitemapNode,
    TextSection,
)
from forsaj.content.reader import ContentStore, StoreState
from forsaj.content.scanner import RegexSourceScanner, scan_directory
from forsaj.content.service import ContentService, ExtractionResult
from forsaj.content.types import Candidate, CandidateKind, ExtractionPass, Scanner

__all__ = [
    "Candidate",
    "CandidateKind",
    "ContentService",
    "ContentStore",
    "ExtractionPass",
    "ExtractionResult",
    "ExtractionStats",
    "ImageOrigin",
    "ImageRef",
    "ManifestWriter",
    "Page",
    "PageAssembler",
    "RegexSourceScanner",
    "Scanner",
    "SitemapNode",
    "StoreState",
    "TextSection",
    "build_sitemap",
    "compute_stats",
    "is_candidate_text",
    "order_pages",
    "scan_directory",
]
