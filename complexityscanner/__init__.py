"""
Cyclomatic complexity scanner for Python source trees.

Parses each file with tree-sitter, scores every function as 1 plus the
number of decision points in its body, and aggregates the results for a
whole directory.
"""

__version__ = "0.1.0"

from complexityscanner.analysis.complexity import analyze_complexity
from complexityscanner.config import ScanConfig
from complexityscanner.core.engine import ComplexityScanner, analyze
from complexityscanner.core.models import AnalysisResult, FunctionRecord, Summary

__all__ = [
    "AnalysisResult",
    "ComplexityScanner",
    "FunctionRecord",
    "ScanConfig",
    "Summary",
    "analyze",
    "analyze_complexity",
]
