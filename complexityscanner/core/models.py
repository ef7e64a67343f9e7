"""
Result data structures for the complexity scanner.

FunctionRecord, Summary and FileError are immutable; AnalysisResult is
assembled once by the scan engine and only read afterwards.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional


@dataclass(frozen=True)
class FunctionRecord:
    """Complexity of a single function definition."""

    name: str
    start_line: int
    complexity: int
    file_path: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "file": self.file_path,
            "line": self.start_line,
            "complexity": self.complexity,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FunctionRecord":
        return cls(
            name=data["name"],
            file_path=data.get("file", ""),
            start_line=int(data["line"]),
            complexity=int(data["complexity"]),
        )


@dataclass(frozen=True)
class Summary:
    """Aggregate statistics over a set of function records."""

    mean_complexity: float
    max_complexity: int
    total_functions: int
    functions_above_threshold: int

    @classmethod
    def from_records(cls, records: Iterable[FunctionRecord], threshold: int) -> Optional["Summary"]:
        """Recompute the summary from scratch; None when there are no records."""
        complexities = [record.complexity for record in records]
        if not complexities:
            return None
        return cls(
            mean_complexity=sum(complexities) / len(complexities),
            max_complexity=max(complexities),
            total_functions=len(complexities),
            functions_above_threshold=sum(1 for c in complexities if c > threshold),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mean_complexity": self.mean_complexity,
            "max_complexity": self.max_complexity,
            "total_functions": self.total_functions,
            "functions_above_threshold": self.functions_above_threshold,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Summary":
        return cls(
            mean_complexity=float(data["mean_complexity"]),
            max_complexity=int(data["max_complexity"]),
            total_functions=int(data["total_functions"]),
            functions_above_threshold=int(data["functions_above_threshold"]),
        )


@dataclass(frozen=True)
class FileError:
    """A file that was skipped because it could not be read or parsed."""

    file_path: str
    kind: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"file": self.file_path, "kind": self.kind, "message": self.message}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileError":
        return cls(file_path=data["file"], kind=data["kind"], message=data["message"])


@dataclass
class AnalysisResult:
    """Everything produced by one scan."""

    functions: List[FunctionRecord] = field(default_factory=list)
    summary: Optional[Summary] = None
    errors: List[FileError] = field(default_factory=list)
    threshold: int = 10
    files_analyzed: int = 0

    def functions_above(self, threshold: Optional[int] = None) -> List[FunctionRecord]:
        limit = self.threshold if threshold is None else threshold
        return [f for f in self.functions if f.complexity > limit]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "functions": [f.to_dict() for f in self.functions],
            "summary": self.summary.to_dict() if self.summary else None,
            "errors": [e.to_dict() for e in self.errors],
            "threshold": self.threshold,
            "files_analyzed": self.files_analyzed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisResult":
        summary = data.get("summary")
        return cls(
            functions=[FunctionRecord.from_dict(f) for f in data.get("functions", [])],
            summary=Summary.from_dict(summary) if summary else None,
            errors=[FileError.from_dict(e) for e in data.get("errors", [])],
            threshold=int(data.get("threshold", 10)),
            files_analyzed=int(data.get("files_analyzed", 0)),
        )

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: str) -> "AnalysisResult":
        return cls.from_dict(json.loads(text))
