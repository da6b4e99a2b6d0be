from __future__ import annotations

from .corpus import SNAPSHOT_SOURCES, generate_corpus_files, generate_sources

__all__ = ["SNAPSHOT_SOURCES", "generate_corpus_files", "generate_sources"]
