"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

api.py

Function-level interface to the three pipeline stages, for callers that want
to drive them individually (a CLI, a progress UI, a script):

- crawl: enumerate regular files under a root directory
- hash_all: digest every file in bounded concurrent batches
- duplicates: filter and order the digest map into duplicate groups

Progress callbacks receive (stage, current, total); total is None while crawling.
"""
from typing import List, Optional, Tuple

from dupcrawl.core.crawler import FileCrawlerImpl
from dupcrawl.core.batch import BatchHasherImpl
from dupcrawl.core.grouper import DigestGrouperImpl
from dupcrawl.core.interfaces import ProgressCallback, StoppedFlag
from dupcrawl.core.models import (
    CrawlOptions,
    DigestGroupMap,
    DuplicateGroup,
    HashError,
    HashOptions,
    SortOrder,
)


def crawl(
    root: str,
    max_depth: int = -1,
    follow_symlinks: bool = False,
    progress_callback: Optional[ProgressCallback] = None,
    stopped_flag: Optional[StoppedFlag] = None
) -> List[str]:
    """
    Returns paths of all regular files under `root`.

    Raises:
        ValueError: invalid options
        OSError: the root or a directory below it cannot be listed
    """
    options = CrawlOptions(max_depth=max_depth, follow_symlinks=follow_symlinks)
    return FileCrawlerImpl().crawl(
        root,
        options,
        stopped_flag=stopped_flag,
        progress_callback=progress_callback
    )


def hash_all(
    paths: List[str],
    options: Optional[HashOptions] = None,
    progress_callback: Optional[ProgressCallback] = None,
    stopped_flag: Optional[StoppedFlag] = None
) -> Tuple[DigestGroupMap, List[HashError]]:
    """
    Hashes `paths` with at most `options.batch_size` files in flight.
    Per-file failures are returned, never raised.
    """
    return BatchHasherImpl(options or HashOptions()).hash_all(
        paths,
        stopped_flag=stopped_flag,
        progress_callback=progress_callback
    )


def duplicates(
    group_map: DigestGroupMap,
    sort_order: SortOrder = SortOrder.SIZE
) -> List[DuplicateGroup]:
    """Groups of 2+ paths sharing a digest, paths sorted, groups ordered by `sort_order`."""
    return DigestGrouperImpl().duplicates(group_map, sort_order)
