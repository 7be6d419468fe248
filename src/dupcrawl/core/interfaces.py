"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Core interfaces (Protocols) for the crawl -> hash -> group pipeline.
Structural typing keeps the stages swappable and easy to fake in tests.

Key Components:
---------------
- HashAlgorithm: one-shot hash primitive folded by the chained digest (MD5, xxHash128).
- DigestHasher: computes the (possibly sampled) digest of a single file.
- FileCrawler: enumerates regular-file paths under a root directory.
- BatchHasher: hashes many files under a concurrency cap, collecting per-file errors.
- Grouper: turns a digest map into ordered duplicate groups.
"""

from typing import Protocol, List, Tuple, Optional, Callable
from dupcrawl.core.models import (
    CrawlOptions,
    DigestGroupMap,
    DuplicateGroup,
    HashError,
    SortOrder,
)

ProgressCallback = Callable[[str, int, Optional[int]], None]
StoppedFlag = Callable[[], bool]


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions without affecting the
    chaining/sampling logic. Digest size must be constant for an algorithm.
    """

    digest_size: int

    @staticmethod
    def hash(data: bytes) -> bytes:
        """Computes the hash of the provided byte data."""
        ...


class DigestHasher(Protocol):
    """Interface for computing one file's digest."""
    def compute_digest(self, path: str) -> bytes:
        """
        Raises:
            OSError: if the file cannot be opened, stat'ed or read.
        """
        ...


class FileCrawler(Protocol):
    """
    Interface for walking a directory tree and collecting file paths.
    """
    def crawl(
        self,
        root_dir: str,
        options: CrawlOptions,
        stopped_flag: Optional[StoppedFlag] = None,
        progress_callback: Optional[ProgressCallback] = None
    ) -> List[str]:
        """
        Args:
            root_dir: Directory to start from.
            options: Depth limit and symlink policy.
            stopped_flag: Function that returns True if the crawl should stop.
            progress_callback: Called once per file found (stage, found, None).

        Returns:
            Paths of all regular files reachable under the policy.

        Raises:
            OSError: if a directory cannot be listed or an entry cannot be stat'ed.
        """
        ...


class BatchHasher(Protocol):
    """
    Interface for hashing a list of files in bounded concurrent batches.
    """
    def hash_all(
        self,
        paths: List[str],
        stopped_flag: Optional[StoppedFlag] = None,
        progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[DigestGroupMap, List[HashError]]:
        """
        Returns:
            A tuple containing:
                - digest -> paths map of successfully hashed files
                - one HashError per file that could not be hashed
        """
        ...


class Grouper(Protocol):
    """Interface for the final grouping and ordering stage."""
    def duplicates(
        self,
        group_map: DigestGroupMap,
        sort_order: SortOrder = SortOrder.SIZE
    ) -> List[DuplicateGroup]:
        ...
