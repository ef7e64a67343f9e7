from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator

from complexityscanner.parsing.treesitter import PYTHON, LanguageSpec, language_for_path


DEFAULT_EXCLUDED_DIRS = (
    "__pycache__",
    "venv",
    ".venv",
)


def is_excluded(path: str, root: str, excluded_dirs: Iterable[str]) -> bool:
    """True when any directory segment of ``path`` below ``root`` is excluded."""
    excluded = set(excluded_dirs)
    relative = Path(os.path.relpath(path, root))
    return any(part in excluded for part in relative.parent.parts)


def iter_source_files(
    root: str,
    excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
    spec: LanguageSpec = PYTHON,
) -> Iterator[str]:
    """Yield source files under ``root`` in sorted, depth-first order.

    A ``root`` that is itself a file is yielded when its extension matches.
    """
    excluded = set(excluded_dirs)
    if os.path.isfile(root):
        if language_for_path(root, spec):
            yield root
        return
    for current, dirs, files in os.walk(root):
        dirs[:] = sorted(d for d in dirs if d not in excluded)
        for name in sorted(files):
            path = os.path.join(current, name)
            if language_for_path(path, spec) and not is_excluded(path, root, excluded):
                yield path
