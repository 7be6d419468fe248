"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Turns the digest -> paths map produced by hashing into ordered duplicate groups.
"""

from typing import List, Callable, Optional
import logging

from dupcrawl.core.interfaces import Grouper
from dupcrawl.core.models import DigestGroupMap, DuplicateGroup, SortOrder
from dupcrawl.core.sorter import Sorter

logger = logging.getLogger(__name__)


class DigestGrouperImpl(Grouper):
    """
    Filters out singleton digests and orders what is left.
    `size_of` can be injected to replace the filesystem size lookup.
    """

    def __init__(self, size_of: Optional[Callable[[str], int]] = None):
        self.size_of = size_of

    @staticmethod
    def filter_duplicates(group_map: DigestGroupMap) -> List[DuplicateGroup]:
        """Groups with less than 2 paths are not duplicates."""
        return [
            DuplicateGroup(digest=digest, paths=list(paths))
            for digest, paths in group_map.items()
            if len(paths) >= 2
        ]

    def duplicates(
        self,
        group_map: DigestGroupMap,
        sort_order: SortOrder = SortOrder.SIZE
    ) -> List[DuplicateGroup]:
        groups = self.filter_duplicates(group_map)
        Sorter.sort(groups, sort_order, self.size_of)
        logger.info(f"Found {len(groups)} duplicate groups among {len(group_map)} digests")
        return groups
