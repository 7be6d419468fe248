"""
Core duplicate search engine — crawler, hashers, grouper and sorter.

This package contains the performance-critical foundation of dupcrawl:
- FileCrawlerImpl: depth- and symlink-aware directory traversal
- SampledHasherImpl + MD5AlgorithmImpl/XXHash128AlgorithmImpl: chained, optionally sampled file digests
- BatchHasherImpl: bounded-concurrency hashing with per-file error collection
- DigestGrouperImpl + Sorter: singleton filtering and deterministic ordering
- Models: DigestGroupMap, DuplicateGroup, HashError and configuration objects

All components are pure Python — suitable for CLI and library usage.
"""

from .crawler import FileCrawlerImpl
from .hasher import SampledHasherImpl, MD5AlgorithmImpl, XXHash128AlgorithmImpl
from .batch import BatchHasherImpl
from .grouper import DigestGrouperImpl
from .sorter import Sorter, SizeCache
from .models import (
    CrawlOptions, HashOptions, SearchParams, SearchStats, SortOrder, DigestAlgorithm,
    DigestGroupMap, DuplicateGroup, FileHash, HashError)

__all__ = [
    "FileCrawlerImpl",
    "SampledHasherImpl",
    "MD5AlgorithmImpl",
    "XXHash128AlgorithmImpl",
    "BatchHasherImpl",
    "DigestGrouperImpl",
    "Sorter",
    "SizeCache",
    "CrawlOptions",
    "HashOptions",
    "SearchParams",
    "SearchStats",
    "SortOrder",
    "DigestAlgorithm",
    "DigestGroupMap",
    "DuplicateGroup",
    "FileHash",
    "HashError",
]
