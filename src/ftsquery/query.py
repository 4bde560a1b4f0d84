"""Google-like search expressions to SQL Server full-text search conditions.

No exceptions are raised for badly formed input; the engine builds the best
condition it can and returns an empty string when nothing valid remains.

Syntax::

    abc                     inflectional forms of abc
    ~abc                    thesaurus variations of abc
    "abc"  or  +abc         exact term abc
    abc*                    words starting with abc
    "abc" near "def"        exact abc near exact def
    <+abc +def>             exact abc near exact def
    -abc def  /  not abc    def but not abc
    abc def  /  abc and def both abc and def
    abc or def              either abc or def
    abc and (def or ghi)    abc and either def or ghi

Pipeline: ``parse_node`` builds a left-leaning expression tree,
``fix_up_expression_tree`` rewrites the parts SQL Server cannot express,
and ``render`` prints what survives.
"""
from __future__ import annotations

import logging
import sys
from collections.abc import Iterable

from ftsquery.nodes import (
    Conjunction,
    ExpressionNode,
    InternalNode,
    TermForm,
    TerminalNode,
    render,
)
from ftsquery.scanner import WHITESPACE, TextScanner
from ftsquery.stop_words import STANDARD_STOP_WORDS

log = logging.getLogger(__name__)

# Characters not allowed in unquoted search terms
PUNCTUATION = "~\"`!@#$%^&*()-+=[]{}\\|;:,.<>?/"

# Blocks nested deeper than this are dropped instead of parsed.  Each level
# costs two interpreter frames; half the limit is left for callers.
MAX_NESTING_DEPTH = sys.getrecursionlimit() // 4

_QUOTES = "\"'"

_CONJUNCTION_KEYWORDS: dict[str, Conjunction] = {
    "and": "And",
    "or": "Or",
    "near": "Near",
}
_NOT_KEYWORD = "not"


def _is_term_char(ch: str) -> bool:
    return ch not in PUNCTUATION and ch not in WHITESPACE


def _is_invalid_with_near(node: ExpressionNode | None) -> bool:
    """NEAR only joins exact (literal) terminal terms."""
    return not isinstance(node, TerminalNode) or node.form != "Literal"


def _is_invalid_with_or(node: ExpressionNode | None) -> bool:
    """OR cannot take a missing or excluded (NOT) operand."""
    return node is None or node.exclude


class FtsQuery:
    """Converts user-friendly search expressions to full-text conditions.

    Parameters
    ----------
    add_standard_stop_words:
        If ``True``, the built-in ``STANDARD_STOP_WORDS`` are loaded.
    stop_words:
        Additional stop words, appended after the built-in list.

    The stop-word set is fixed at construction, so one instance can be
    shared between threads.  Use ``with_stop_words`` to derive a new engine.
    """

    def __init__(
        self,
        add_standard_stop_words: bool = False,
        stop_words: Iterable[str] | None = None,
    ) -> None:
        words: list[str] = list(STANDARD_STOP_WORDS) if add_standard_stop_words else []
        if stop_words is not None:
            words.extend(stop_words)
        self._stop_words: tuple[str, ...] = tuple(dict.fromkeys(words))
        self._stop_word_set: frozenset[str] = frozenset(self._stop_words)

    @property
    def stop_words(self) -> tuple[str, ...]:
        return self._stop_words

    def with_stop_words(self, words: Iterable[str]) -> FtsQuery:
        """Return a new engine with *words* added to this engine's stop words."""
        return FtsQuery(stop_words=(*self._stop_words, *words))

    def is_stop_word(self, word: str) -> bool:
        return word in self._stop_word_set

    # ─── Public entry point ───────────────────────────────────────

    def transform(self, query: str | None) -> str:
        """Convert *query* to a valid full-text search condition.

        Returns an empty string if no valid condition could be built.
        """
        root = self.parse_node(query, "And")
        root = self.fix_up_expression_tree(root, is_root=True)
        condition = render(root)
        log.debug("Transformed %r -> %r", query, condition)
        return condition

    # ─── Parsing ──────────────────────────────────────────────────

    def parse_node(
        self,
        query: str | None,
        default_conjunction: Conjunction = "And",
    ) -> ExpressionNode | None:
        """Parse a query segment into an expression tree.

        *default_conjunction* joins consecutive terms that have no explicit
        operator between them.  Returns ``None`` if no term was found.
        """
        return self._parse_node(query, default_conjunction, 0)

    def _parse_node(
        self,
        query: str | None,
        default_conjunction: Conjunction,
        depth: int,
    ) -> ExpressionNode | None:
        conjunction = default_conjunction
        exclude = False
        form: TermForm = "Inflectional"
        reset_state = True
        root: ExpressionNode | None = None

        scanner = TextScanner(query)
        while not scanner.end_of_text:
            if reset_state:
                # Modifiers only apply to the next term
                conjunction = default_conjunction
                form = "Inflectional"
                exclude = False
                reset_state = False

            scanner.skip_whitespace()
            if scanner.end_of_text:
                break

            ch = scanner.peek()

            if ch not in PUNCTUATION:
                term = scanner.take_while(_is_term_char)
                # Trailing wildcard; prefix terms must be exact
                if scanner.peek() == "*":
                    term += "*"
                    scanner.advance()
                    form = "Literal"

                keyword = term.lower()
                if keyword in _CONJUNCTION_KEYWORDS:
                    conjunction = _CONJUNCTION_KEYWORDS[keyword]
                elif keyword == _NOT_KEYWORD:
                    exclude = True
                else:
                    root = self.add_node_by_string(root, term, form, exclude, conjunction)
                    reset_state = True
                continue

            # "'" is not punctuation, so it is read as part of a bare word
            # above and only acts as a quote inside extract_block.
            if ch == '"':
                scanner.advance()
                term = scanner.take_while(lambda c: c != ch)
                root = self.add_node_by_string(
                    root, term.strip(), "Literal", exclude, conjunction,
                )
                reset_state = True
            elif ch == "(":
                block = self.extract_block(scanner, "(", ")")
                node = self._parse_block(block, default_conjunction, depth)
                root = self.add_node(root, node, conjunction, group=True)
                reset_state = True
            elif ch == "<":
                block = self.extract_block(scanner, "<", ">")
                node = self._parse_block(block, "Near", depth)
                root = self.add_node(root, node, conjunction)
                reset_state = True
            elif ch == "-":
                exclude = True
            elif ch == "+":
                form = "Literal"
            elif ch == "~":
                form = "Thesaurus"

            scanner.advance()

        return root

    def _parse_block(
        self,
        block: str,
        default_conjunction: Conjunction,
        depth: int,
    ) -> ExpressionNode | None:
        if depth >= MAX_NESTING_DEPTH:
            log.warning(
                "Dropping block nested deeper than %d levels: %.40r",
                MAX_NESTING_DEPTH,
                block,
            )
            return None
        return self._parse_node(block, default_conjunction, depth + 1)

    @staticmethod
    def extract_block(scanner: TextScanner, open_char: str, close_char: str) -> str:
        """Extract the text between *open_char* and its matching *close_char*.

        The scanner must be positioned on *open_char*.  Delimiters inside
        quoted text are not counted.  On return the scanner is positioned on
        the closing character, or at the end of the text if none was found.
        """
        depth = 1
        scanner.advance()
        start = scanner.position
        while not scanner.end_of_text:
            ch = scanner.peek()
            if ch == open_char:
                depth += 1
            elif ch == close_char:
                depth -= 1
                if depth == 0:
                    break
            elif ch in _QUOTES:
                scanner.advance()
                scanner.skip_while(lambda c: c != ch)
            scanner.advance()
        return scanner.extract(start, scanner.position)

    # ─── Tree building ────────────────────────────────────────────

    def add_node_by_string(
        self,
        root: ExpressionNode | None,
        term: str,
        form: TermForm,
        exclude: bool,
        conjunction: Conjunction,
    ) -> ExpressionNode | None:
        """Create a terminal node for *term* and add it to the tree.

        Empty terms and stop words are dropped, quoted or not.
        """
        if not term:
            return root
        if self.is_stop_word(term):
            log.debug("Dropping stop word %r", term)
            return root
        node = TerminalNode(term=term, form=form, exclude=exclude)
        return self.add_node(root, node, conjunction)

    @staticmethod
    def add_node(
        root: ExpressionNode | None,
        node: ExpressionNode | None,
        conjunction: Conjunction,
        group: bool = False,
    ) -> ExpressionNode | None:
        """Join *node* to the right of *root* and return the new root."""
        if node is None:
            return root
        node.grouped = group
        if root is None:
            return node
        return InternalNode(left=root, right=node, conjunction=conjunction)

    # ─── Normalization ────────────────────────────────────────────

    def fix_up_expression_tree(
        self,
        node: ExpressionNode | None,
        is_root: bool = False,
    ) -> ExpressionNode | None:
        """Rewrite subexpressions SQL Server would reject.

        * ``NEAR`` becomes ``AND`` unless both sides are exact terms.
        * ``term1 OR NOT term2`` drops the excluded operand.
        * ``NOT term1 AND term2`` swaps so the exclusion comes last.
        * An exclude-only expression is discarded when it is grouped or is
          the root; elsewhere a parent may still pair it with a positive
          sibling.

        Children are fixed before their parent.  Nodes are rewritten in
        place; the (possibly different) new root is returned.
        """
        if node is None:
            return None

        fixed_root: ExpressionNode | None = None
        # (node, parent, is_left_child, children_done)
        stack: list[tuple[ExpressionNode, InternalNode | None, bool, bool]] = [
            (node, None, False, False),
        ]
        while stack:
            current, parent, is_left, children_done = stack.pop()
            if isinstance(current, InternalNode) and not children_done:
                stack.append((current, parent, is_left, True))
                if current.right is not None:
                    stack.append((current.right, current, False, False))
                if current.left is not None:
                    stack.append((current.left, current, True, False))
                continue

            fixed = self._fix_up_node(current, is_root and parent is None)
            if parent is None:
                fixed_root = fixed
            elif is_left:
                parent.left = fixed
            else:
                parent.right = fixed
        return fixed_root

    def _fix_up_node(self, node: ExpressionNode, is_root: bool) -> ExpressionNode | None:
        """Fix one node whose children have already been fixed."""
        result: ExpressionNode = node
        if isinstance(node, InternalNode):
            if node.conjunction == "Near":
                if _is_invalid_with_near(node.left) or _is_invalid_with_near(node.right):
                    log.debug("Demoting NEAR to AND: operands are not both exact terms")
                    node.conjunction = "And"
            elif node.conjunction == "Or":
                if _is_invalid_with_or(node.left):
                    log.debug("Dropping left OR operand: missing or excluded")
                    node.left = None
                if _is_invalid_with_or(node.right):
                    log.debug("Dropping right OR operand: missing or excluded")
                    node.right = None

            if node.left is None:
                if node.right is None:
                    log.debug("Eliminating expression with no remaining operands")
                    return None
                result = node.right
            elif node.right is None:
                result = node.left
            else:
                node.exclude = node.left.exclude and node.right.exclude
                # SQL Server accepts "a AND NOT b" but not "NOT b AND a"
                if not node.exclude and node.left.exclude:
                    node.left, node.right = node.right, node.left

        if (result.grouped or is_root) and result.exclude:
            log.debug("Eliminating exclude-only expression")
            return None
        return result
