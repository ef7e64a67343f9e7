from __future__ import annotations

from typing import List, Optional

from tree_sitter import Node

from complexityscanner.core.models import FunctionRecord
from complexityscanner.parsing.treesitter import SourceParser, node_text


def analyze_complexity(source: str, parser: Optional[SourceParser] = None) -> List[FunctionRecord]:
    """Return one record per function definition found in ``source``.

    Complexity is 1 plus one per decision point anywhere inside the body,
    including the bodies of nested functions and lambdas. The records carry
    no file path; callers stamp it.

    Raises ParseError when the parser rejects the source.
    """
    parser = parser or SourceParser()
    tree = parser.parse(source)
    spec = parser.spec
    records: List[FunctionRecord] = []
    matches = parser.query(tree.root_node, spec.function_query)
    for captures in sorted(matches, key=lambda c: c["function"][0].start_byte):
        function_node = captures["function"][0]
        name_node = captures["name"][0]
        body_node = captures["body"][0]
        records.append(
            FunctionRecord(
                name=node_text(name_node),
                start_line=function_node.start_point[0] + 1,
                complexity=cyclomatic(parser, body_node),
            )
        )
    return records


def cyclomatic(parser: SourceParser, body_node: Node) -> int:
    return 1 + parser.count(body_node, parser.spec.decision_query)
