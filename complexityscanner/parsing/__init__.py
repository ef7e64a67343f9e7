"""Tree-sitter parser adapter."""

from complexityscanner.parsing.treesitter import PYTHON, LanguageSpec, SourceParser

__all__ = ["PYTHON", "LanguageSpec", "SourceParser"]
