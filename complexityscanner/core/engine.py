"""
Scan engine for the complexity scanner.

Discovers source files under a root, runs the complexity analyzer on each
and folds the per-file results into a single AnalysisResult.
"""

import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional

from complexityscanner.analysis.complexity import analyze_complexity
from complexityscanner.config import ScanConfig
from complexityscanner.core.errors import (
    AnalysisError,
    FileAccessError,
    FileReadError,
    ParseError,
    ParseFailedError,
)
from complexityscanner.core.models import AnalysisResult, FileError, FunctionRecord, Summary
from complexityscanner.logging_config import get_logger
from complexityscanner.parsing.treesitter import PYTHON, LanguageSpec, SourceParser
from complexityscanner.utils.files import iter_source_files

logger = get_logger(__name__)


@dataclass
class FileOutcome:
    """Records found in one file, or the error that stopped its analysis."""
    file_path: str
    functions: List[FunctionRecord] = field(default_factory=list)
    error: Optional[AnalysisError] = None


class ComplexityScanner:
    """
    Walks a source tree and computes per-function cyclomatic complexity.

    With ``fail_fast`` unset, files that cannot be read or parsed are
    recorded in ``AnalysisResult.errors`` and the walk continues. With it
    set, the first such failure is raised.
    """

    def __init__(self, config: Optional[ScanConfig] = None, spec: LanguageSpec = PYTHON):
        self.config = config or ScanConfig()
        self.spec = spec
        self._local = threading.local()

    def parser(self) -> SourceParser:
        """Parser for the calling thread; tree-sitter parsers are not shared."""
        parser = getattr(self._local, "parser", None)
        if parser is None:
            parser = SourceParser(self.spec, strict=self.config.strict_parsing)
            self._local.parser = parser
        return parser

    def discover_files(self, root_path: str) -> List[str]:
        if not os.path.exists(root_path):
            raise FileAccessError(root_path)
        files = list(iter_source_files(root_path, self.config.excluded_dirs(), self.spec))
        logger.debug("Discovered %d source files under %s", len(files), root_path)
        return files

    def read_file(self, file_path: str) -> str:
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FileReadError(file_path, str(e)) from e

    def analyze_file(self, file_path: str) -> FileOutcome:
        """Analyze one file, capturing read and parse failures in the outcome."""
        start_time = time.perf_counter()
        try:
            source = self.read_file(file_path)
            try:
                functions = analyze_complexity(source, self.parser())
            except ParseError as e:
                raise ParseFailedError(file_path, str(e)) from e
        except AnalysisError as e:
            return FileOutcome(file_path=file_path, error=e)

        logger.debug(
            "Analyzed %s: %d functions in %.3fs",
            file_path,
            len(functions),
            time.perf_counter() - start_time,
        )
        return FileOutcome(
            file_path=file_path,
            functions=[replace(record, file_path=file_path) for record in functions],
        )

    def _outcomes(self, files: List[str]) -> Iterable[FileOutcome]:
        if self.config.max_workers > 1 and len(files) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                # map() yields in submission order, keeping discovery order
                yield from executor.map(self.analyze_file, files)
        else:
            for file_path in files:
                yield self.analyze_file(file_path)

    def scan(self, root_path: str, include_summary: bool = True) -> AnalysisResult:
        """
        Scan a file or directory.

        Args:
            root_path: File or directory to analyze.
            include_summary: Compute summary statistics when functions were found.

        Returns:
            AnalysisResult with functions in discovery order.
        """
        threshold = self.config.threshold
        files = self.discover_files(root_path)

        functions: List[FunctionRecord] = []
        errors: List[FileError] = []
        files_analyzed = 0
        for outcome in self._outcomes(files):
            if outcome.error is not None:
                if self.config.fail_fast:
                    raise outcome.error
                logger.warning("Skipping %s: %s", outcome.file_path, outcome.error.reason)
                errors.append(
                    FileError(
                        file_path=outcome.file_path,
                        kind=outcome.error.kind,
                        message=outcome.error.reason,
                    )
                )
                continue

            files_analyzed += 1
            functions.extend(outcome.functions)

        summary = Summary.from_records(functions, threshold) if include_summary else None

        return AnalysisResult(
            functions=functions,
            summary=summary,
            errors=errors,
            threshold=threshold,
            files_analyzed=files_analyzed,
        )


def analyze(root_path: str, threshold: int = 10, **options) -> AnalysisResult:
    """
    Analyze a file or directory with default settings.

    Args:
        root_path: File or directory to analyze.
        threshold: Functions with complexity strictly above this are counted
            in the summary.
        **options: Additional ScanConfig fields, e.g. ``fail_fast=True``.
    """
    include_summary = options.pop("include_summary", True)
    config = ScanConfig(threshold=threshold, **options)
    return ComplexityScanner(config).scan(root_path, include_summary=include_summary)
