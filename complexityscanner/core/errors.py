"""
Exception hierarchy for the complexity scanner.

Per-file failures derive from AnalysisError and carry the offending path,
so the engine can either record them or let them abort the run.
"""

from typing import Dict, Optional


class ComplexityScannerError(Exception):
    """Base exception for all complexity scanner errors."""

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class InvalidArgumentError(ComplexityScannerError):
    """Raised for an invalid user-supplied option, such as an unknown output format."""


class ConfigError(ComplexityScannerError):
    """Raised when a configuration file cannot be loaded or holds bad values."""


class ParseError(ComplexityScannerError):
    """Raised by the parser adapter when the grammar rejects source text."""

    def __init__(self, reason: str, line: int = 0, column: int = 0):
        super().__init__(reason, details={"line": str(line), "column": str(column)})
        self.reason = reason
        self.line = line
        self.column = column


class AnalysisError(ComplexityScannerError):
    """Base class for failures tied to a single file."""

    kind = "analysis"

    def __init__(self, file_path: str, reason: str):
        super().__init__(
            f"Cannot analyze {file_path}: {reason}",
            details={"kind": self.kind},
        )
        self.file_path = file_path
        self.reason = reason


class FileReadError(AnalysisError):
    """Raised when a source file cannot be read or decoded."""

    kind = "read"


class ParseFailedError(AnalysisError):
    """Raised when a source file cannot be parsed."""

    kind = "parse"


class FileAccessError(ComplexityScannerError):
    """Raised when the scan root does not exist."""

    def __init__(self, path: str):
        super().__init__(f"Path not found: {path}")
        self.path = path


class OutputError(ComplexityScannerError):
    """Raised when the report cannot be written to its destination."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot write report to {path}", details={"reason": reason})
        self.path = path
        self.reason = reason
