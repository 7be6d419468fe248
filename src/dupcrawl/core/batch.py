"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/batch.py
Bounded-concurrency hashing of a path list.

Paths are processed in consecutive batches of at most `batch_size` files. A
batch is submitted to a thread pool of the same size and fully collected
before the next one is submitted, which caps open handles and read buffers.
Workers return FileHash values; only the calling thread touches the
DigestGroupMap and the error list.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, List, Tuple, Optional
import time
import logging

from dupcrawl.core.models import DigestGroupMap, FileHash, HashError, HashOptions, Stage
from dupcrawl.core.interfaces import BatchHasher, DigestHasher, ProgressCallback, StoppedFlag
from dupcrawl.core.hasher import SampledHasherImpl

logger = logging.getLogger(__name__)


class BatchHasherImpl(BatchHasher):
    """
    Uses an injected DigestHasher instance for flexibility and testability.
    """

    def __init__(self, options: HashOptions = None, hasher: DigestHasher = None):
        self.options = options or HashOptions()
        self.hasher = hasher or SampledHasherImpl(self.options)

    def hash_file(self, path: str) -> FileHash:
        """
        Runs in a worker thread. Never raises for I/O failures or for paths
        open() rejects (embedded NUL bytes).
        """
        try:
            return FileHash(path=path, digest=self.hasher.compute_digest(path))
        except (OSError, ValueError) as e:
            return FileHash(path=path, error=HashError.from_exception(path, e))

    def hash_batch(self, executor: ThreadPoolExecutor, batch: List[str],
                   on_done: Optional[Callable[[FileHash], None]] = None) -> List[FileHash]:
        """
        Submits one batch and blocks until every file in it has finished.
        `on_done` is called from this thread as each result arrives.
        """
        futures = [executor.submit(self.hash_file, path) for path in batch]
        results = []
        for future in as_completed(futures):
            result = future.result()
            results.append(result)
            if on_done:
                on_done(result)
        return results

    def hash_all(
        self,
        paths: List[str],
        stopped_flag: Optional[StoppedFlag] = None,
        progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[DigestGroupMap, List[HashError]]:
        group_map = DigestGroupMap()
        errors: List[HashError] = []
        total = len(paths)
        batch_size = self.options.batch_size
        processed = 0

        def on_done(result: FileHash):
            nonlocal processed
            if group_map.merge(result):
                logger.debug(f"Hashed {result.path}: {result.digest.hex()}")
            else:
                errors.append(result.error)
                logger.warning(f"Could not hash {result.error}")
            processed += 1
            if progress_callback:
                progress_callback(Stage.HASH.value, processed, total)

        logger.debug(f"Hashing {total} files in batches of {batch_size}")
        start_time = time.time()

        with ThreadPoolExecutor(max_workers=batch_size) as executor:
            for offset in range(0, total, batch_size):
                # Cancellation is only honored between batches
                if stopped_flag and stopped_flag():
                    logger.debug(f"Hashing interrupted by user after {processed}/{total} files")
                    break
                self.hash_batch(executor, paths[offset:offset + batch_size], on_done)

        logger.info(f"Hashed {group_map.file_count} files into {len(group_map)} digests "
                    f"({len(errors)} errors) in {time.time() - start_time:.2f}s")
        return group_map, errors
