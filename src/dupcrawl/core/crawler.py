"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/crawler.py
Directory crawler producing the list of regular files to hash.
Features:
- Explicit work stack of (directory, remaining depth) instead of recursion
- Depth limit skips only the subtree that reaches it, siblings are still listed
- Symlinks skipped by default, or followed like their targets
- Symlink loops cut by tracking each directory's ancestors
- Listing/stat failures abort the crawl with the original OSError
"""

import os
from pathlib import Path
from typing import List, Optional, FrozenSet, Tuple
import time
import logging

from dupcrawl.core.models import CrawlOptions, Stage
from dupcrawl.core.interfaces import FileCrawler, ProgressCallback, StoppedFlag

logger = logging.getLogger(__name__)

DirKey = Tuple[int, int]


class FileCrawlerImpl(FileCrawler):
    """
    Walks a directory tree sequentially. Returned paths keep the form of the
    root they were found under (relative roots give relative paths).
    """

    def crawl(
        self,
        root_dir: str,
        options: Optional[CrawlOptions] = None,
        stopped_flag: Optional[StoppedFlag] = None,
        progress_callback: Optional[ProgressCallback] = None
    ) -> List[str]:
        options = options or CrawlOptions()
        logger.debug(f"Crawling {root_dir} (max_depth={options.max_depth}, "
                     f"follow_symlinks={options.follow_symlinks})")

        if not Path(root_dir).is_dir():
            error_msg = f"Not a directory: {root_dir}"
            logger.error(error_msg)
            raise NotADirectoryError(error_msg)

        found_files: List[str] = []
        if options.max_depth == 0:
            return found_files

        start_time = time.time()
        stack: List[Tuple[str, int, FrozenSet[DirKey]]] = [
            (root_dir, options.max_depth, self._ancestors_of(root_dir, frozenset(), options))
        ]

        while stack:
            if stopped_flag and stopped_flag():
                logger.debug("Crawl interrupted by user")
                return found_files

            directory, remaining, ancestors = stack.pop()
            # Negative depth never reaches zero
            child_depth = remaining - 1 if remaining > 0 else remaining

            try:
                with os.scandir(directory) as entries:
                    for entry in entries:
                        if entry.is_symlink() and not options.follow_symlinks:
                            logger.debug(f"Skipping symbolic link: {entry.path}")
                            continue

                        if entry.is_dir():
                            if child_depth == 0:
                                logger.debug(f"Depth limit reached, not entering: {entry.path}")
                                continue
                            child_ancestors = self._ancestors_of(entry.path, ancestors, options)
                            if child_ancestors is None:
                                logger.debug(f"Skipping symlink loop: {entry.path}")
                                continue
                            stack.append((entry.path, child_depth, child_ancestors))
                        elif entry.is_file():
                            found_files.append(entry.path)
                            if progress_callback:
                                progress_callback(Stage.CRAWL.value, len(found_files), None)
                        else:
                            logger.debug(f"Skipping non-regular entry: {entry.path}")
            except OSError as e:
                logger.error(f"Cannot crawl directory {directory}: {e}")
                raise

        logger.debug(f"Total crawl time: {time.time() - start_time:.2f} seconds")
        logger.info(f"Crawl completed. Found {len(found_files)} files under {root_dir}")
        return found_files

    @staticmethod
    def _ancestors_of(
        path: str,
        ancestors: FrozenSet[DirKey],
        options: CrawlOptions
    ) -> Optional[FrozenSet[DirKey]]:
        """
        Ancestor set for a directory about to be entered, or None if the
        directory is already one of its own ancestors.
        Only tracked when following symlinks; without them the tree has no loops.
        """
        if not options.follow_symlinks:
            return ancestors
        st = os.stat(path)
        key = (st.st_dev, st.st_ino)
        if key in ancestors:
            return None
        return ancestors | {key}
