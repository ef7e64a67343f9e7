"""Core data structures, errors and the scan engine."""

from complexityscanner.core.errors import (
    AnalysisError,
    ComplexityScannerError,
    FileReadError,
    ParseError,
    ParseFailedError,
)
from complexityscanner.core.models import AnalysisResult, FileError, FunctionRecord, Summary

__all__ = [
    "AnalysisError",
    "AnalysisResult",
    "ComplexityScannerError",
    "FileError",
    "FileReadError",
    "FunctionRecord",
    "ParseError",
    "ParseFailedError",
    "Summary",
]
