"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/sorter.py
Pure sorting logic for duplicate groups.
Hashing finishes in arbitrary order, so every ordering the user sees is applied here.
"""
import os
import logging
from typing import List, Callable, Dict, Optional
from dupcrawl.core.models import DuplicateGroup, SortOrder

logger = logging.getLogger(__name__)


class SizeCache:
    """
    Memoized file size lookup used when ordering groups by size.
    A path that can no longer be stat'ed counts as size 0.
    """

    def __init__(self, stat_func: Callable[[str], int] = os.path.getsize):
        self._stat_func = stat_func
        self._sizes: Dict[str, int] = {}

    def __call__(self, path: str) -> int:
        if path not in self._sizes:
            try:
                self._sizes[path] = self._stat_func(path)
            except OSError as e:
                logger.warning(f"Could not get size of {path}: {e}")
                self._sizes[path] = 0
        return self._sizes[path]

    def __len__(self) -> int:
        return len(self._sizes)


class Sorter:
    """
    Sorts paths inside duplicate groups and the groups themselves.
    Modifies groups in-place.
    Ordering applied:
    1. Paths inside each group: lexicographic
    2. Groups, by sort_order:
       - SIZE: size of the first path, then first path
       - LEXICOGRAPHIC: first path
    """

    @staticmethod
    def sort_paths_inside_groups(groups: List[DuplicateGroup]) -> None:
        if not groups:
            return
        for group in groups:
            group.paths.sort()

    @staticmethod
    def sort_groups(
            groups: List[DuplicateGroup],
            sort_order: SortOrder = SortOrder.SIZE,
            size_of: Optional[Callable[[str], int]] = None
    ) -> None:
        """
        Expects the paths inside groups to be sorted already, so the first
        path is well defined.
        """
        if not groups:
            return

        if sort_order == SortOrder.SIZE:
            size_of = size_of or SizeCache()
            for group in groups:
                group.size = size_of(group.first_path)
            groups.sort(key=lambda g: (g.size, g.first_path))
        elif sort_order == SortOrder.LEXICOGRAPHIC:
            groups.sort(key=lambda g: g.first_path)
        else:
            raise ValueError(f"Unknown sort order: {sort_order!r}")

    @staticmethod
    def sort(
            groups: List[DuplicateGroup],
            sort_order: SortOrder = SortOrder.SIZE,
            size_of: Optional[Callable[[str], int]] = None
    ) -> None:
        Sorter.sort_paths_inside_groups(groups)
        Sorter.sort_groups(groups, sort_order, size_of)
