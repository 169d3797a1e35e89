"""
Shared fixtures for duplicate engine tests.
Creates isolated temporary directories with controlled test files.
"""
import os
from pathlib import Path
from typing import Dict, Iterable, List, Set

import pytest

# 5000 bytes that are not all the same value, so prefixes and tails differ
BASE_CONTENT = (bytes(range(256)) * 20)[:5000]


def write_file(path: Path, data: bytes, mtime: float = None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


def group_path_sets(groups: Iterable) -> List[Set[str]]:
    """Members of each group as a set of paths, in emission order."""
    return [set(group.paths) for group in groups]


@pytest.fixture
def scenario_dir(tmp_path) -> Dict[str, Path]:
    """
    Creates controlled test files for duplicate detection:
    - a.txt, b.txt, sub/a_copy.bin: 5000 bytes, byte-identical
    - c.txt: same first 4096 bytes as a.txt, different tail
    - f.txt: same size as a.txt, differs in the first byte
    - d.txt, e.txt: 500-byte duplicates (below the default 1 KiB minimum)
    - g1.dat, g2.dat: 2048-byte duplicates of a different size
    """
    files = {}
    files["a"] = write_file(tmp_path / "a.txt", BASE_CONTENT)
    files["b"] = write_file(tmp_path / "b.txt", BASE_CONTENT)
    files["a_copy"] = write_file(tmp_path / "sub" / "a_copy.bin", BASE_CONTENT)
    files["c"] = write_file(tmp_path / "c.txt", BASE_CONTENT[:4096] + b"X" * 904)
    files["f"] = write_file(tmp_path / "f.txt", b"F" + BASE_CONTENT[1:])
    files["d"] = write_file(tmp_path / "d.txt", b"d" * 500)
    files["e"] = write_file(tmp_path / "e.txt", b"d" * 500)
    files["g1"] = write_file(tmp_path / "g1.dat", b"G" * 2048)
    files["g2"] = write_file(tmp_path / "nested" / "deeper" / "g2.dat", b"G" * 2048)
    return files
