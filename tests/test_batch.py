"""
Unit tests for BatchHasherImpl.
Verifies per-file error collection, progress accounting and the batch concurrency cap.
"""
import threading
import time
from dupcrawl.core.batch import BatchHasherImpl
from dupcrawl.core.hasher import SampledHasherImpl
from dupcrawl.core.models import HashOptions


class RecordingHasher:
    """Fake DigestHasher that records concurrency and start/finish order."""

    def __init__(self, delay: float = 0.02):
        self.delay = delay
        self.lock = threading.Lock()
        self.in_flight = 0
        self.max_in_flight = 0
        self.events = []

    def compute_digest(self, path: str) -> bytes:
        with self.lock:
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
            self.events.append(("start", path))
        time.sleep(self.delay)
        with self.lock:
            self.in_flight -= 1
            self.events.append(("end", path))
        if path.startswith("bad"):
            raise PermissionError(13, "Permission denied", path)
        return path[-1].encode() * 16


class TestBatchHasherResults:

    def test_groups_identical_files(self, alpha_tree, small_options):
        paths = [str(p) for key, p in alpha_tree.items() if key != "root"]

        group_map, errors = BatchHasherImpl(small_options).hash_all(paths)

        assert errors == []
        assert group_map.file_count == 6
        assert len(group_map) == 4
        groups = sorted(sorted(paths) for _, paths in group_map.items())
        assert sorted([str(alpha_tree["b"]), str(alpha_tree["charlie_b"])]) in groups
        assert sorted([str(alpha_tree["bravo_d"]), str(alpha_tree["charlie_d"])]) in groups

    def test_unreadable_file_produces_one_error_and_no_entry(self, temp_dir, small_options):
        good = [temp_dir / f"good{i}" for i in range(5)]
        for p in good:
            p.write_bytes(b"same content")
        missing = temp_dir / "missing"
        paths = [str(good[0]), str(missing)] + [str(p) for p in good[1:]]

        group_map, errors = BatchHasherImpl(small_options).hash_all(paths)

        assert len(errors) == 1
        assert errors[0].path == str(missing)
        assert isinstance(errors[0].error, FileNotFoundError)
        assert errors[0].reason
        # Every other file in and after the failing batch succeeded
        assert group_map.file_count == 5
        assert len(group_map) == 1
        assert str(missing) not in next(iter(group_map.items()))[1]

    def test_path_rejected_by_open_does_not_abort_run(self, temp_dir):
        good = [temp_dir / f"g{i}" for i in range(3)]
        for p in good:
            p.write_bytes(b"same content")
        bad = str(temp_dir) + "/bad\0name"
        paths = [str(good[0]), bad, str(good[1]), str(good[2])]

        group_map, errors = BatchHasherImpl(HashOptions(batch_size=2)).hash_all(paths)

        assert len(errors) == 1
        assert errors[0].path == bad
        assert isinstance(errors[0].error, ValueError)
        assert group_map.file_count == 3
        assert len(group_map) == 1

    def test_empty_input(self, small_options):
        group_map, errors = BatchHasherImpl(small_options).hash_all([])
        assert len(group_map) == 0
        assert errors == []

    def test_injected_hasher_errors_are_collected(self):
        hasher = RecordingHasher(delay=0)
        paths = ["ok/1", "bad/2", "ok/3", "bad/4"]

        group_map, errors = BatchHasherImpl(HashOptions(batch_size=3), hasher).hash_all(paths)

        assert sorted(e.path for e in errors) == ["bad/2", "bad/4"]
        assert all(e.reason == "Permission denied" for e in errors)
        assert group_map.file_count == 2


class TestBatchHasherProgress:

    def test_progress_called_once_per_input_file(self, temp_dir, small_options):
        for i in range(7):
            (temp_dir / f"f{i}").write_bytes(bytes([i]) * 10)
        paths = [str(temp_dir / f"f{i}") for i in range(7)] + [str(temp_dir / "gone1"), str(temp_dir / "gone2")]
        calls = []

        BatchHasherImpl(small_options).hash_all(
            paths,
            progress_callback=lambda stage, current, total: calls.append((stage, current, total))
        )

        assert len(calls) == len(paths)
        assert [c[1] for c in calls] == list(range(1, len(paths) + 1))
        assert all(c[0] == "Hashing" and c[2] == len(paths) for c in calls)

    def test_stopped_flag_checked_between_batches(self):
        hasher = RecordingHasher(delay=0)
        checks = []

        def stopped_flag():
            checks.append(True)
            return len(checks) > 2  # allow two batches

        group_map, errors = BatchHasherImpl(HashOptions(batch_size=2), hasher).hash_all(
            [f"ok/{i}" for i in range(10)],
            stopped_flag=stopped_flag
        )

        assert group_map.file_count == 4
        assert len([e for e in hasher.events if e[0] == "start"]) == 4


class TestBatchConcurrency:

    def test_never_exceeds_batch_size(self):
        hasher = RecordingHasher()
        paths = [f"ok/{i}" for i in range(9)]

        BatchHasherImpl(HashOptions(batch_size=3), hasher).hash_all(paths)

        assert hasher.max_in_flight <= 3
        assert len([e for e in hasher.events if e[0] == "end"]) == 9

    def test_batches_do_not_overlap(self):
        """Batch N+1 starts only after every file of batch N has finished."""
        hasher = RecordingHasher()
        paths = [f"ok/{i}" for i in range(7)]
        batch_size = 3

        BatchHasherImpl(HashOptions(batch_size=batch_size), hasher).hash_all(paths)

        position = {event: idx for idx, event in enumerate(hasher.events)}
        batches = [paths[i:i + batch_size] for i in range(0, len(paths), batch_size)]
        for current, following in zip(batches, batches[1:]):
            last_end = max(position[("end", p)] for p in current)
            first_start = min(position[("start", p)] for p in following)
            assert last_end < first_start

    def test_batch_size_one_is_sequential(self, alpha_tree):
        paths = [str(p) for key, p in alpha_tree.items() if key != "root"]
        options = HashOptions(read_buffer_size=64, batch_size=1)

        sequential, _ = BatchHasherImpl(options).hash_all(paths)
        parallel, _ = BatchHasherImpl(HashOptions(read_buffer_size=64, batch_size=8)).hash_all(paths)

        assert sorted(sequential.digests()) == sorted(parallel.digests())

    def test_default_hasher_uses_options(self, small_options):
        batch = BatchHasherImpl(small_options)
        assert isinstance(batch.hasher, SampledHasherImpl)
        assert batch.hasher.options is small_options
