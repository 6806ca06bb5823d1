"""
expander.py

Scanner + variant group expansion core.

Scanner output (structure, no expansion):
  - Lit(text)        a group-free run of characters, emitted verbatim
  - Bare()           the "~" member: the enclosing prefix without its separator
  - Group(prefix, sep, members, tail, offset)
                     prefix immediately followed by "(...)"; sep is derived
                     from the last prefix character ("-" DASH, ":" COLON,
                     anything else NONE); tail is the text after ")"

Expansion (left to right, depth first):
  text-(center red)                 -> text-center, text-red
  outline-(~ 2)                     -> outline, outline-2
  placeholder:(italic text-(red sm)) -> placeholder:italic,
                                       placeholder:text-red,
                                       placeholder:text-sm
  text-(red sm)/50                  -> text-red/50, text-sm/50

  - members are separated by whitespace at depth 0 only
  - "\\(" and "\\)" never open or close a group
  - "[...]" regions are opaque (arbitrary values, selector variants)
  - "!" importance markers and "/" values are plain characters
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Literal, Optional, Tuple, Union

__all__ = [
    "ExpandError",
    "UnbalancedGroup",
    "EmptyGroup",
    "Lit",
    "Bare",
    "Group",
    "scan_token",
    "split_members",
    "is_grouped",
    "expand_token",
    "expand",
    "format_error",
]


# ============================================================
# Errors
# ============================================================

class ExpandError(ValueError):
    """
    Structural error in a raw token.

    Attributes:
        token:   the raw token being expanded
        offset:  character offset into token where the problem was found
        message: short human readable description
        index:   position of token in the batch passed to expand(), if known
    """

    def __init__(self, token: str, offset: int, message: str, index: Optional[int] = None):
        super().__init__(message)
        self.token = token
        self.offset = offset
        self.message = message
        self.index = index

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        where = f"offset {self.offset} of {self.token!r}"
        if self.index is not None:
            where = f"{where} (token {self.index})"
        return f"{self.message} at {where}"


class UnbalancedGroup(ExpandError):
    pass


class EmptyGroup(ExpandError):
    pass


# ============================================================
# Segments (scanner output)
# ============================================================

SepKind = Literal["DASH", "COLON", "NONE"]

_SEPARATORS: dict[str, SepKind] = {"-": "DASH", ":": "COLON"}

BARE_MARKER = "~"


@dataclass(frozen=True)
class Lit:
    text: str


@dataclass(frozen=True)
class Bare:
    pass


@dataclass(frozen=True)
class Group:
    prefix: str
    sep: SepKind
    members: Tuple["Node", ...]
    tail: Optional["Node"] = None
    offset: int = 0  # index of "(" in the raw token


Node = Union[Lit, Bare, Group]


def _sep_kind(prefix: str) -> SepKind:
    return _SEPARATORS.get(prefix[-1:], "NONE")


def _strip_sep(prefix: str, sep: SepKind) -> str:
    return prefix if sep == "NONE" else prefix[:-1]


# ============================================================
# Low-level scanners
# ============================================================
#
# All scanners work on (token, start, end) spans of the raw token so that
# offsets reported in errors always refer to the caller's string.

def _skip_bracket(s: str, start: int, end: int) -> int:
    """
    Given s[start] == "[", return index one-past the matching "]".
    Nested brackets are tracked; an unclosed "[" swallows the rest of the span.
    """
    depth = 0
    i = start
    while i < end:
        ch = s[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return end


def _find_open(s: str, start: int, end: int) -> Optional[int]:
    """
    Index of the first unescaped "(" outside [...] in s[start:end], or None.
    A ")" met before any "(" has nothing to close.
    """
    i = start
    while i < end:
        ch = s[i]
        if ch == "\\":
            i += 2
        elif ch == "[":
            i = _skip_bracket(s, i, end)
        elif ch == "(":
            return i
        elif ch == ")":
            raise UnbalancedGroup(s, i, "unmatched ')'")
        else:
            i += 1
    return None


def _match_close(s: str, lparen: int, end: int) -> int:
    """Given s[lparen] == "(", return the index of its matching ")"."""
    depth = 0
    i = lparen
    while i < end:
        ch = s[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "[":
            i = _skip_bracket(s, i, end)
            continue
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    raise UnbalancedGroup(s, lparen, "unmatched '('")


def _split_spans(s: str, start: int, end: int) -> List[Tuple[int, int]]:
    """
    Split s[start:end] on whitespace at depth 0 only.

    Protected regions:
      - paren_depth: (...)
      - [...]        skipped as a whole
      - \\x          escaped character
    """
    out: List[Tuple[int, int]] = []
    paren_depth = 0
    item_start: Optional[int] = None

    i = start
    while i < end:
        ch = s[i]

        if ch.isspace() and paren_depth == 0:
            if item_start is not None:
                out.append((item_start, i))
                item_start = None
            i += 1
            continue

        if item_start is None:
            item_start = i

        if ch == "\\":
            i += 2
            continue
        if ch == "[":
            i = _skip_bracket(s, i, end)
            continue
        if ch == "(":
            paren_depth += 1
        elif ch == ")" and paren_depth > 0:
            paren_depth -= 1
        i += 1

    if item_start is not None:
        out.append((item_start, min(i, end)))
    return out


def split_members(inner: str) -> List[str]:
    """
    Split group inner text into members on top-level whitespace.

    Whitespace inside nested (...) or [...] does not split; runs of
    whitespace collapse and leading/trailing whitespace is ignored.
    """
    return [inner[a:b] for a, b in _split_spans(inner, 0, len(inner))]


# ============================================================
# Stage 1: scanner that outputs Lit/Bare/Group nodes
# ============================================================
#
# Nesting and tail chains are driven by work lists rather than recursion,
# so token depth is bounded by memory, not by the interpreter stack.

def _scan_chain(s: str, start: int, end: int):
    """
    Scan the groups chained left to right in s[start:end].

    Returns (groups, rest) where groups is a list of
    (prefix, lparen, member spans) and rest is the text after the last ")"
    (None when nothing follows it, the whole span when there is no group).
    """
    groups: List[Tuple[str, int, List[Tuple[int, int]]]] = []
    pos = start
    while True:
        lparen = _find_open(s, pos, end)
        if lparen is None:
            break
        rparen = _match_close(s, lparen, end)
        prefix = s[pos:lparen]
        spans = _split_spans(s, lparen + 1, rparen)
        if not spans:
            raise EmptyGroup(s, lparen, f"empty group after {prefix!r}")
        groups.append((prefix, lparen, spans))
        pos = rparen + 1

    rest = s[pos:end] if pos < end or not groups else None
    return groups, rest


def _scan_expr(s: str, start: int, end: int) -> Node:
    plans = {}
    order: List[Tuple[int, int]] = []
    todo = [(start, end)]
    while todo:
        span = todo.pop()
        groups, rest = _scan_chain(s, *span)
        plans[span] = (groups, rest)
        order.append(span)
        nested = [(a, b) for _, _, spans in groups for a, b in spans if s[a:b] != BARE_MARKER]
        # reversed so members are scanned left to right
        todo.extend(reversed(nested))

    # children were discovered after their parents
    nodes: dict[Tuple[int, int], Node] = {}
    for span in reversed(order):
        groups, rest = plans[span]
        node: Optional[Node] = None if rest is None else Lit(rest)
        for prefix, lparen, spans in reversed(groups):
            members = tuple(
                Bare() if s[a:b] == BARE_MARKER else nodes[(a, b)]
                for a, b in spans
            )
            node = Group(prefix, _sep_kind(prefix), members, node, lparen)
        nodes[span] = node
    return nodes[(start, end)]


def scan_token(token: str) -> List[Node]:
    """
    Scan one raw token into its class expressions.

    A token without any group comes back as a single Lit holding the whole
    token. Otherwise the token is split on top-level whitespace and each
    class expression is scanned on its own.
    """
    n = len(token)
    if _find_open(token, 0, n) is None:
        return [Lit(token)]
    return [_scan_expr(token, a, b) for a, b in _split_spans(token, 0, n)]


def is_grouped(token: str) -> bool:
    """True if token holds at least one variant group."""
    return _find_open(token, 0, len(token)) is not None


# ============================================================
# Stage 2: depth-first expansion
# ============================================================

def _chain(node: Group) -> List[Group]:
    """node followed by every Group reachable through its tail."""
    out = [node]
    while isinstance(out[-1].tail, Group):
        out.append(out[-1].tail)
    return out


def _render(root: Node) -> List[str]:
    """
    Expand a node tree, members before their enclosing prefix.

    A "~" under a prefix that is only a separator renders as "" here;
    empty names are dropped by expand_token once all tails are joined.
    """
    if isinstance(root, Bare):
        raise TypeError("bare marker outside of a group")

    done: dict[int, List[str]] = {}
    stack: List[Tuple[Node, bool]] = [(root, False)]
    while stack:
        node, ready = stack.pop()
        if isinstance(node, Lit):
            done[id(node)] = [node.text]
            continue

        chain = _chain(node)
        if not ready:
            stack.append((node, True))
            for g in chain:
                stack.extend((m, False) for m in g.members if not isinstance(m, Bare))
            continue

        last = chain[-1].tail
        out = [""] if last is None else [last.text]
        for g in reversed(chain):
            heads: List[str] = []
            for m in g.members:
                if isinstance(m, Bare):
                    heads.append(_strip_sep(g.prefix, g.sep))
                else:
                    heads.extend(g.prefix + suffix for suffix in done[id(m)])
            out = [f"{head}{t}" for head in heads for t in out]
        done[id(node)] = out

    return done[id(root)]


def expand_token(token: str) -> List[str]:
    """Expand a single raw token into flat class names."""
    out: List[str] = []
    for node in scan_token(token):
        names = _render(node)
        if isinstance(node, Group):
            names = [name for name in names if name]
        out.extend(names)
    return out


def expand(tokens: Union[str, Iterable[str]]) -> List[str]:
    """
    Expand raw tokens in order and concatenate the results.

    A structural error in any token aborts the whole call; the raised
    ExpandError carries the index of the failing token.
    """
    if isinstance(tokens, str):
        tokens = [tokens]

    out: List[str] = []
    for i, token in enumerate(tokens):
        try:
            out.extend(expand_token(token))
        except ExpandError as e:
            e.index = i
            raise
    return out


def format_error(err: ExpandError) -> str:
    """Three-line diagnostic: message, offending token, caret under the offset."""
    where = "" if err.index is None else f" in token {err.index}"
    return "\n".join([
        f"error: {err.kind}{where}: {err.message}",
        f"  {err.token}",
        "  " + " " * err.offset + "^",
    ])


# ============================================================
# Selftest
# ============================================================

def _selftest() -> None:
    """Run the built-in assertions; raises AssertionError on the first failure."""
    def st(token: str):
        def conv(node):
            if isinstance(node, Lit):
                return ("LIT", node.text)
            if isinstance(node, Bare):
                return ("BARE",)
            tail = None if node.tail is None else conv(node.tail)
            return ("GROUP", node.prefix, node.sep, [conv(m) for m in node.members], tail)
        return [conv(n) for n in scan_token(token)]

    # --- scanner tests ---
    assert st("text-red") == [("LIT", "text-red")]
    assert st("text-(a b)") == [("GROUP", "text-", "DASH", [("LIT", "a"), ("LIT", "b")], None)]
    assert st("hover:(~)") == [("GROUP", "hover:", "COLON", [("BARE",)], None)]
    assert st("x(a)y") == [("GROUP", "x", "NONE", [("LIT", "a")], ("LIT", "y"))]

    # --- member splitting ---
    assert split_members(" a  b ") == ["a", "b"]
    assert split_members("a text-(b c) d") == ["a", "text-(b c)", "d"]
    assert split_members("[a b] c") == ["[a b]", "c"]

    # --- expansion ---
    assert expand(["p-(x5 y.5)"]) == ["p-x5", "p-y.5"]
    assert expand(["text-(center red)"]) == ["text-center", "text-red"]
    assert expand(["border-(1 blue/30)"]) == ["border-1", "border-blue/30"]
    assert expand(["placeholder:(italic text-sm text-secondary/75)"]) == [
        "placeholder:italic",
        "placeholder:text-sm",
        "placeholder:text-secondary/75",
    ]
    assert expand(["outline-(~ 2 offset-0 transparent)"]) == [
        "outline", "outline-2", "outline-offset-0", "outline-transparent",
    ]
    assert expand(["placeholder:(italic text-(red sm))"]) == [
        "placeholder:italic", "placeholder:text-red", "placeholder:text-sm",
    ]
    assert expand_token("(~)b") == ["b"]
    assert expand_token("a-(x)(~)") == ["a-x"]
    assert len(expand_token("a-(x)" * 2000)) == 1

    # --- errors ---
    for bad, err in (("border-(1", UnbalancedGroup), ("p-()", EmptyGroup)):
        try:
            expand([bad])
        except err:
            pass
        else:
            raise AssertionError(f"{bad!r} should raise {err.__name__}")

