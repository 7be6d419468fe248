"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models and configuration objects for crawling, hashing and grouping.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Union, Iterator, Tuple
from enum import Enum


# =============================
# Enums
# =============================

class SortOrder(Enum):
    """Order in which duplicate groups are presented."""
    SIZE = "size"
    LEXICOGRAPHIC = "path"


class DigestAlgorithm(Enum):
    """
    Hash primitive used by the chained digest.
    Both produce 16-byte digests.
    """
    MD5 = "md5"
    XXH128 = "xxh128"

    @property
    def display_name(self) -> str:
        mapping = {
            DigestAlgorithm.MD5: "MD5",
            DigestAlgorithm.XXH128: "xxHash128",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class Stage(str, Enum):
    CRAWL = "Crawling"
    HASH = "Hashing"
    GROUP = "Grouping"


# ======================
#  Core Data Models
# ======================

@dataclass
class HashError:
    """
    A file that could not be opened, stat'ed or read while hashing.
    `error` is an OSError, or a ValueError for paths open() refuses outright.
    """
    path: str
    reason: str
    error: Optional[Exception] = None

    @classmethod
    def from_exception(cls, path: str, exc: Union[OSError, ValueError]) -> "HashError":
        reason = getattr(exc, "strerror", None) or str(exc) or type(exc).__name__
        return cls(path=path, reason=reason, error=exc)

    def __str__(self):
        return f"{self.path}: {self.reason}"


@dataclass
class FileHash:
    """
    Outcome of hashing one file: exactly one of digest / error is set.
    Returned by hashing tasks instead of touching shared state.
    """
    path: str
    digest: Optional[bytes] = None
    error: Optional[HashError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.digest is not None


@dataclass
class DuplicateGroup:
    """
    Paths that share a digest. Only groups with 2+ paths are reported.
    `size` is filled when the group was ordered by size.
    """
    digest: bytes
    paths: List[str]
    size: Optional[int] = None

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.paths)

    @property
    def first_path(self) -> str:
        return self.paths[0]

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return self.duplicate_count >= 2

    def __repr__(self):
        return f"<DuplicateGroup digest={self.digest.hex()}, count={len(self.paths)}>"


class DigestGroupMap:
    """
    Digest -> paths index built while hashing.
    Owned by a single coordinator; hashing tasks never write to it.
    """

    def __init__(self):
        self._groups: Dict[bytes, List[str]] = {}

    def add(self, digest: bytes, path: str) -> None:
        self._groups.setdefault(digest, []).append(path)

    def merge(self, file_hash: FileHash) -> bool:
        """Adds a successful FileHash. Returns False for failed ones."""
        if not file_hash.ok:
            return False
        self.add(file_hash.digest, file_hash.path)
        return True

    def digests(self) -> List[bytes]:
        return list(self._groups.keys())

    def items(self) -> Iterator[Tuple[bytes, List[str]]]:
        return iter(self._groups.items())

    @property
    def file_count(self) -> int:
        return sum(len(paths) for paths in self._groups.values())

    def __getitem__(self, digest: bytes) -> List[str]:
        return self._groups[digest]

    def __contains__(self, digest: bytes) -> bool:
        return digest in self._groups

    def __len__(self) -> int:
        return len(self._groups)

    def __repr__(self):
        return f"<DigestGroupMap digests={len(self)}, files={self.file_count}>"


@dataclass
class SearchStats:
    """
    Statistics collected during one crawl -> hash -> group run.
    """
    total_time: float = 0.0
    stage_stats: Dict[str, Dict[str, Union[int, float]]] = field(default_factory=dict)

    def update_stage(
            self,
            stage_name: str,
            files_processed: int,
            duration: float,
            groups_found: int = 0,
            errors: int = 0
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "files": 0,
                "groups": 0,
                "errors": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["errors"] += errors
        self.stage_stats[stage_name]["time"] += duration

    def print_summary(self) -> str:
        labels = {
            Stage.CRAWL: "📁 Crawl",
            Stage.HASH: "🔍 Hash",
            Stage.GROUP: "🧮 Group",
        }

        lines = [
            "📊 Search Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            "Stage: FILES / GROUPS / ERRORS / TIME"
        ]

        for stage, data in self.stage_stats.items():
            label = labels.get(stage, stage.title())
            lines.append(
                f"{label}: {data['files']} / {data['groups']} / {data['errors']} / {data['time']:.3f}s"
            )

        return "\n".join(lines)


"""
DTOs for crawl/hash parameters with built-in validation.
Interface-agnostic: used by the API, the command and the CLI.
"""
from dupcrawl.utils.convert_utils import ConvertUtils

DEFAULT_READ_BUFFER_SIZE = 64 * 1024
DEFAULT_SAMPLE_THRESHOLD = 100 * 1024 * 1024
DEFAULT_SAMPLE_RATE = 100
DEFAULT_BATCH_SIZE = 32


def _require_int(name: str, value) -> None:
    # bool is an int subclass but never a meaningful size or count
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {value!r}")


@dataclass(frozen=True)
class CrawlOptions:
    """Negative max_depth means unlimited."""
    max_depth: int = -1
    follow_symlinks: bool = False

    def __post_init__(self):
        _require_int("Max depth", self.max_depth)


@dataclass(frozen=True)
class HashOptions:
    """
    Options for one hashing run.

    read_buffer_size: bytes read (and folded) per chunk
    sample_threshold: files larger than this are sampled
    sample_rate: number of evenly spaced samples across a sampled file; <= 0 disables skipping
    batch_size: maximum number of files hashed concurrently
    """
    read_buffer_size: int = DEFAULT_READ_BUFFER_SIZE
    sample_threshold: int = DEFAULT_SAMPLE_THRESHOLD
    sample_rate: int = DEFAULT_SAMPLE_RATE
    batch_size: int = DEFAULT_BATCH_SIZE
    algorithm: DigestAlgorithm = DigestAlgorithm.MD5

    def __post_init__(self):
        """Validate options immediately after creation."""
        _require_int("Read buffer size", self.read_buffer_size)
        _require_int("Sample threshold", self.sample_threshold)
        _require_int("Sample rate", self.sample_rate)
        _require_int("Batch size", self.batch_size)

        if self.read_buffer_size <= 0:
            raise ValueError("Read buffer size must be positive")

        if self.sample_threshold < 0:
            raise ValueError("Sample threshold cannot be negative")

        if self.batch_size <= 0:
            raise ValueError("Batch size must be at least 1")

        if not isinstance(self.algorithm, DigestAlgorithm):
            raise ValueError(f"Unknown digest algorithm: {self.algorithm!r}")

    def skip_bytes(self, file_size: int) -> int:
        """Bytes skipped after each chunk for a file of the given size."""
        if file_size <= self.sample_threshold or self.sample_rate <= 0:
            return 0
        return file_size // self.sample_rate


@dataclass
class SearchParams:
    """Parameters for one duplicate search with validation."""
    root_dir: str
    crawl: CrawlOptions = field(default_factory=CrawlOptions)
    hashing: HashOptions = field(default_factory=HashOptions)
    sort_order: SortOrder = SortOrder.SIZE

    def __post_init__(self):
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")

    @staticmethod
    def from_human_readable(
            root_dir: str,
            max_depth: int = -1,
            follow_symlinks: bool = False,
            buffer_size_str: str = "64K",
            sample_threshold_str: str = "100M",
            sample_rate: int = DEFAULT_SAMPLE_RATE,
            batch_size: int = DEFAULT_BATCH_SIZE,
            sort_order: SortOrder = SortOrder.SIZE,
            algorithm: DigestAlgorithm = DigestAlgorithm.MD5,
    ) -> 'SearchParams':
        """
        Factory method to create params from human-readable inputs.
        Useful for CLI argument parsing.
        """
        return SearchParams(
            root_dir=root_dir,
            crawl=CrawlOptions(max_depth=max_depth, follow_symlinks=follow_symlinks),
            hashing=HashOptions(
                read_buffer_size=ConvertUtils.human_to_bytes(buffer_size_str, allow_zero=False),
                sample_threshold=ConvertUtils.human_to_bytes(sample_threshold_str),
                sample_rate=sample_rate,
                batch_size=batch_size,
                algorithm=algorithm,
            ),
            sort_order=sort_order,
        )
