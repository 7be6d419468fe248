"""
dupcrawl — duplicate file finder for very large trees and very large files.

Core features:
- Depth- and symlink-aware directory crawl
- Chained MD5 (or xxHash128) digests, sampled for files above a size threshold
- Bounded-concurrency hashing in batches; unreadable files are reported, not fatal
- Deterministic duplicate groups ordered by size or path
- Read-only: files are never moved or deleted
"""
from pathlib import Path

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("dupcrawl")
except Exception:
    import tomllib

    with open(Path(__file__).resolve().parents[2] / "pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

# Public API — only what users should import directly
from dupcrawl.api import crawl, hash_all, duplicates
from dupcrawl.commands import DuplicateSearchCommand, SearchResult
from dupcrawl.core import (
    CrawlOptions, HashOptions, SearchParams, SortOrder, DigestAlgorithm,
    DigestGroupMap, DuplicateGroup, HashError)
from dupcrawl.utils.convert_utils import ConvertUtils

__all__ = [
    "crawl",
    "hash_all",
    "duplicates",
    "DuplicateSearchCommand",
    "SearchResult",
    "CrawlOptions",
    "HashOptions",
    "SearchParams",
    "SortOrder",
    "DigestAlgorithm",
    "DigestGroupMap",
    "DuplicateGroup",
    "HashError",
    "ConvertUtils",
    "__version__",
]
