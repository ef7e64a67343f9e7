import textwrap
from pathlib import Path
from typing import Dict

import pytest

from tests.sources import COMPLEX_SOURCE, NESTED_SOURCE, SIMPLE_SOURCE


@pytest.fixture
def make_tree(tmp_path: Path):
    """Write a mapping of relative path -> source text under tmp_path."""

    def _make(files: Dict[str, str]) -> Path:
        for name, content in files.items():
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content), encoding="utf-8")
        return tmp_path

    return _make


@pytest.fixture
def sample_tree(make_tree) -> Path:
    return make_tree(
        {
            "simple.py": SIMPLE_SOURCE,
            "complex.py": COMPLEX_SOURCE,
            "subdir/nested.py": NESTED_SOURCE,
            "venv/ignored.py": "def ignored():\n    pass\n",
            "__pycache__/cached.py": "def cached():\n    pass\n",
            "README.md": "def not_python():\n    pass\n",
        }
    )
