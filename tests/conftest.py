"""
Shared fixtures for dupcrawl tests.
Creates isolated temporary directory trees with controlled file contents.
"""
import pytest
import tempfile
from pathlib import Path
from typing import Dict
import sys

# Add src/ to sys.path so 'dupcrawl' is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from dupcrawl.core.models import HashOptions


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def alpha_tree(temp_dir) -> Dict[str, Path]:
    """
    Tree used for end-to-end checks:
        alpha/a                  unique
        alpha/b                  copy of B
        alpha/bravo/d            copy of D
        alpha/bravo/charlie/b    copy of B
        alpha/bravo/charlie/c    unique
        alpha/bravo/charlie/d    copy of D
    B copies are smaller than D copies.
    """
    content_b = b"bravo content\n" * 20          # 280 bytes
    content_d = b"delta content, longer\n" * 60  # 1320 bytes

    charlie = temp_dir / "alpha" / "bravo" / "charlie"
    charlie.mkdir(parents=True)

    files = {
        "a": temp_dir / "alpha" / "a",
        "b": temp_dir / "alpha" / "b",
        "bravo_d": temp_dir / "alpha" / "bravo" / "d",
        "charlie_b": charlie / "b",
        "charlie_c": charlie / "c",
        "charlie_d": charlie / "d",
    }
    files["a"].write_bytes(b"alpha unique content\n" * 7)
    files["b"].write_bytes(content_b)
    files["bravo_d"].write_bytes(content_d)
    files["charlie_b"].write_bytes(content_b)
    files["charlie_c"].write_bytes(b"charlie unique content\n" * 11)
    files["charlie_d"].write_bytes(content_d)
    files["root"] = temp_dir
    return files


@pytest.fixture
def small_options() -> HashOptions:
    """Small buffers so that even test files span several chunks."""
    return HashOptions(read_buffer_size=256, sample_threshold=1024, sample_rate=10, batch_size=2)
