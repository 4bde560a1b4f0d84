"""Expression tree for full-text search conditions.

Two node types:

* **TerminalNode** (leaf): one search term with its match form.
* **InternalNode** (compound): two subexpressions joined by a conjunction.

Functions:

* ``render``: tree to SQL Server full-text condition text.
* ``node_to_json``: tree to a JSON-compatible dict.
* ``iter_terminals``: leaves in left-to-right order.

Trees built from long queries lean deeply to the left, so every traversal
here uses an explicit stack instead of recursion.
"""
from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Literal, TypeAlias

Conjunction: TypeAlias = Literal["And", "Or", "Near"]
TermForm: TypeAlias = Literal["Inflectional", "Thesaurus", "Literal"]


# ---------------------------------------------------------------------------
# Node types
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class TerminalNode:
    """Leaf: a single search term."""

    term: str
    form: TermForm | None = "Inflectional"
    exclude: bool = False
    grouped: bool = False

    def __str__(self) -> str:
        return _render_terminal(self)


@dataclass(slots=True)
class InternalNode:
    """Compound: ``left`` and ``right`` joined by ``conjunction``."""

    left: ExpressionNode | None = None
    right: ExpressionNode | None = None
    conjunction: Conjunction | None = None
    exclude: bool = False
    grouped: bool = False

    def __str__(self) -> str:
        return render(self)


ExpressionNode = TerminalNode | InternalNode


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _render_terminal(node: TerminalNode) -> str:
    prefix = "NOT " if node.exclude else ""
    if node.form == "Inflectional":
        return f"{prefix}FORMSOF(INFLECTIONAL, {node.term})"
    if node.form == "Thesaurus":
        return f"{prefix}FORMSOF(THESAURUS, {node.term})"
    if node.form == "Literal":
        return f'{prefix}"{node.term}"'
    return ""


def render(node: ExpressionNode | None) -> str:
    """Render *node* as a full-text search condition.

    Grouped internal nodes are wrapped in parentheses and the conjunction
    keyword is upper-cased.  A missing child renders as its sibling alone.
    """
    if node is None:
        return ""
    parts: list[str] = []
    # Pending items are either literal text or nodes still to render.
    stack: list[str | ExpressionNode] = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, TerminalNode):
            parts.append(_render_terminal(item))
        elif item.left is None or item.right is None:
            child = item.left if item.right is None else item.right
            if child is not None:
                stack.append(child)
        else:
            joiner = f" {item.conjunction.upper()} " if item.conjunction else " "
            if item.grouped:
                parts.append("(")
                stack.append(")")
            stack.extend((item.right, joiner, item.left))
    return "".join(parts)


# ---------------------------------------------------------------------------
# Traversal helpers
# ---------------------------------------------------------------------------

def iter_terminals(node: ExpressionNode | None) -> Iterator[TerminalNode]:
    """Yield the terminal nodes of the tree from left to right."""
    stack: list[ExpressionNode] = [node] if node is not None else []
    while stack:
        current = stack.pop()
        if isinstance(current, TerminalNode):
            yield current
            continue
        if current.right is not None:
            stack.append(current.right)
        if current.left is not None:
            stack.append(current.left)


def node_to_json(node: ExpressionNode | None) -> dict[str, Any] | None:
    """Serialize an expression tree to a JSON-compatible dict.

    Terminal::

        {"type": "terminal", "term": "abc", "form": "Literal",
         "exclude": false, "grouped": false}

    Internal::

        {"type": "internal", "conjunction": "And", "exclude": false,
         "grouped": true, "left": {...}, "right": {...}}
    """
    if node is None:
        return None
    built: dict[int, dict[str, Any]] = {}
    stack: list[tuple[ExpressionNode, bool]] = [(node, False)]
    while stack:
        current, expanded = stack.pop()
        if isinstance(current, TerminalNode):
            built[id(current)] = {
                "type": "terminal",
                "term": current.term,
                "form": current.form,
                "exclude": current.exclude,
                "grouped": current.grouped,
            }
            continue
        if not expanded:
            stack.append((current, True))
            for child in (current.right, current.left):
                if child is not None:
                    stack.append((child, False))
            continue
        built[id(current)] = {
            "type": "internal",
            "conjunction": current.conjunction,
            "exclude": current.exclude,
            "grouped": current.grouped,
            "left": built.pop(id(current.left)) if current.left is not None else None,
            "right": built.pop(id(current.right)) if current.right is not None else None,
        }
    return built[id(node)]
