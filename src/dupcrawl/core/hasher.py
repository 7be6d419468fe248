"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Per-file digest computation with pluggable hash algorithms.

The digest is chained, not streamed: starting from H(b""), every chunk read is
folded as H(previous_digest + chunk). Files above the sample threshold skip
size // sample_rate bytes after each chunk, so only evenly spaced samples are
read. Two files that agree on every sampled chunk get the same digest even if
they differ elsewhere.
"""

import hashlib
import os
import xxhash
from typing import Dict, Type

from dupcrawl.core.models import HashOptions, DigestAlgorithm
from dupcrawl.core.interfaces import DigestHasher, HashAlgorithm


# Use the same way to implement and use any other hashing algorithm
class MD5AlgorithmImpl(HashAlgorithm):
    digest_size = 16

    @staticmethod
    def hash(data: bytes) -> bytes:
        return hashlib.md5(data).digest()


class XXHash128AlgorithmImpl(HashAlgorithm):
    digest_size = 16

    @staticmethod
    def hash(data: bytes) -> bytes:
        return xxhash.xxh3_128(data).digest()


ALGORITHMS: Dict[DigestAlgorithm, Type[HashAlgorithm]] = {
    DigestAlgorithm.MD5: MD5AlgorithmImpl,
    DigestAlgorithm.XXH128: XXHash128AlgorithmImpl,
}


def algorithm_for(kind: DigestAlgorithm) -> HashAlgorithm:
    return ALGORITHMS[kind]()


class SampledHasherImpl(DigestHasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Hashes whole files below the sample threshold and evenly spaced chunks above it.
    """

    def __init__(self, options: HashOptions = None, algorithm: HashAlgorithm = None):
        self.options = options or HashOptions()
        self.algorithm = algorithm or algorithm_for(self.options.algorithm)

    @property
    def seed(self) -> bytes:
        """Digest of a file with no chunks folded in (an empty file)."""
        return self.algorithm.hash(b"")

    def fold(self, digest: bytes, chunk: bytes) -> bytes:
        return self.algorithm.hash(digest + chunk)

    def compute_digest(self, path: str) -> bytes:
        """Opens, stats and reads the file; any OSError is left to the caller."""
        with open(path, 'rb') as f:
            file_size = os.fstat(f.fileno()).st_size
            return self.digest_stream(f, file_size)

    def digest_stream(self, f, file_size: int) -> bytes:
        """Folds chunks read from a seekable binary stream positioned at 0."""
        buffer_size = self.options.read_buffer_size
        skip = self.options.skip_bytes(file_size)

        digest = self.seed
        while True:
            chunk = f.read(buffer_size)
            if not chunk:
                break
            digest = self.fold(digest, chunk)
            if skip:
                f.seek(skip, os.SEEK_CUR)
        return digest
