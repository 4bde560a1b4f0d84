"""Google-like search syntax to SQL Server full-text search conditions."""

from ftsquery.io_utils import load_stop_words
from ftsquery.nodes import (
    Conjunction,
    ExpressionNode,
    InternalNode,
    TermForm,
    TerminalNode,
    iter_terminals,
    node_to_json,
    render,
)
from ftsquery.query import MAX_NESTING_DEPTH, PUNCTUATION, FtsQuery
from ftsquery.scanner import NULL_CHAR, TextScanner
from ftsquery.stop_words import STANDARD_STOP_WORDS

__all__ = [
    "Conjunction",
    "ExpressionNode",
    "FtsQuery",
    "InternalNode",
    "MAX_NESTING_DEPTH",
    "NULL_CHAR",
    "PUNCTUATION",
    "STANDARD_STOP_WORDS",
    "TermForm",
    "TerminalNode",
    "TextScanner",
    "iter_terminals",
    "load_stop_words",
    "node_to_json",
    "render",
]
