"""
JSON output formatter for machine-readable results.
"""

import json

from complexityscanner.core.models import AnalysisResult


class JSONFormatter:
    """
    Formats analysis results as JSON. The output loads back with
    AnalysisResult.from_json.
    """

    def __init__(self, indent: int = 2):
        self.indent = indent

    def format_result(self, result: AnalysisResult) -> str:
        return json.dumps(result.to_dict(), indent=self.indent)
