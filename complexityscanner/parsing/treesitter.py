from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple

import tree_sitter_python
from tree_sitter import Language, Node, Parser, Query, QueryCursor, Tree

from complexityscanner.core.errors import ParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LanguageSpec:
    name: str
    extensions: frozenset[str]
    function_query: str
    decision_node_types: Tuple[str, ...]
    grammar: Callable[[], object]

    @property
    def decision_query(self) -> str:
        return "\n".join(f"({node_type}) @{node_type}" for node_type in self.decision_node_types)

    def load(self) -> Language:
        return Language(self.grammar())


PYTHON = LanguageSpec(
    name="python",
    extensions=frozenset({".py"}),
    function_query=(
        "(function_definition"
        " name: (identifier) @name"
        " body: (block) @body) @function"
    ),
    decision_node_types=(
        "if_statement",
        "elif_clause",
        "for_statement",
        "while_statement",
        "try_statement",
        "except_clause",
        "with_statement",
        "boolean_operator",
    ),
    grammar=tree_sitter_python.language,
)

Captures = Dict[str, List[Node]]


def language_for_path(path: str, spec: LanguageSpec = PYTHON) -> Optional[str]:
    if Path(path).suffix.lower() in spec.extensions:
        return spec.name
    return None


class SourceParser:
    """Parses source text and runs structural queries over the result.

    With ``strict`` unset, trees that contain ERROR or MISSING nodes are
    returned as-is; with ``strict`` set they raise :class:`ParseError`.
    """

    def __init__(self, spec: LanguageSpec = PYTHON, strict: bool = False) -> None:
        self.spec = spec
        self.strict = strict
        self.language = spec.load()
        self._parser = Parser(self.language)
        self._queries: Dict[str, Query] = {}

    def parse(self, source: str) -> Tree:
        tree = self._parser.parse(source.encode("utf-8"))
        if tree.root_node.has_error:
            error_node = first_error(tree.root_node)
            line, column = error_node.start_point if error_node is not None else (0, 0)
            if self.strict:
                raise ParseError(
                    f"{self.spec.name} grammar rejected the source",
                    line=line + 1,
                    column=column + 1,
                )
            logger.debug("Accepting partial tree with syntax error at %d:%d", line + 1, column + 1)
        return tree

    def compile(self, pattern: str) -> Query:
        query = self._queries.get(pattern)
        if query is None:
            query = Query(self.language, pattern)
            self._queries[pattern] = query
        return query

    def query(self, node: Node, pattern: str) -> List[Captures]:
        cursor = QueryCursor(self.compile(pattern))
        return [captures for _pattern_index, captures in cursor.matches(node)]

    def count(self, node: Node, pattern: str) -> int:
        return len(self.query(node, pattern))


def iter_nodes(node: Node) -> Iterable[Node]:
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def first_error(node: Node) -> Optional[Node]:
    for current in iter_nodes(node):
        if current.is_error or current.is_missing:
            return current
    return None


def node_text(node: Node) -> str:
    if node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")
