"""
Unified command orchestrator for a duplicate search.
Single code path used by the CLI and by library callers.
"""
import time
from dataclasses import dataclass, field
from typing import List, Optional, Callable

from dupcrawl.core.models import DuplicateGroup, HashError, SearchParams, SearchStats, Stage
from dupcrawl.core.crawler import FileCrawlerImpl
from dupcrawl.core.batch import BatchHasherImpl
from dupcrawl.core.grouper import DigestGrouperImpl


@dataclass
class SearchResult:
    groups: List[DuplicateGroup] = field(default_factory=list)
    errors: List[HashError] = field(default_factory=list)
    stats: SearchStats = field(default_factory=SearchStats)
    files_scanned: int = 0


class DuplicateSearchCommand:
    """
    Orchestrates the entire workflow:
    1. Crawl the root directory (completes before hashing starts)
    2. Hash all found files in bounded batches
    3. Filter and order duplicate groups

    Usage:
        params = SearchParams.from_human_readable("/data", sample_threshold_str="1G")
        result = DuplicateSearchCommand().execute(
            params,
            progress_callback=cli_progress_printer,
            stopped_flag=signal_handler_check
        )
    """

    def __init__(self, crawler=None, grouper=None):
        self._crawler = crawler or FileCrawlerImpl()
        self._grouper = grouper or DigestGrouperImpl()
        self._files: List[str] = []

    def execute(
            self,
            params: SearchParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> SearchResult:
        """
        Execute a duplicate search with given parameters.

        Args:
            params: Validated search parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None
            stopped_flag: () -> bool (returns True if operation should stop)

        Returns:
            SearchResult with groups, per-file errors and statistics

        Raises:
            OSError: If the directory tree cannot be crawled
        """
        stats = SearchStats()
        total_start = time.time()

        start = time.time()
        self._files = self._crawler.crawl(
            params.root_dir,
            params.crawl,
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )
        stats.update_stage(Stage.CRAWL, len(self._files), time.time() - start)

        start = time.time()
        hasher = BatchHasherImpl(params.hashing)
        group_map, errors = hasher.hash_all(
            self._files,
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )
        stats.update_stage(Stage.HASH, group_map.file_count, time.time() - start,
                           groups_found=len(group_map), errors=len(errors))

        start = time.time()
        groups = self._grouper.duplicates(group_map, params.sort_order)
        stats.update_stage(Stage.GROUP, sum(g.duplicate_count for g in groups), time.time() - start,
                           groups_found=len(groups))

        stats.total_time = time.time() - total_start
        return SearchResult(groups=groups, errors=errors, stats=stats, files_scanned=len(self._files))

    def get_files(self) -> List[str]:
        """Get crawled paths after execution."""
        return self._files.copy()
