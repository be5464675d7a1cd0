"""Selector parsing and classification.

Selector text is parsed with a Lark grammar into frozen dataclasses. The
parsed form answers the questions the rest of the engine asks about a rule:
is it a bare class, does it use attribute matchers or logical pseudo-classes,
does it target the document globally.
"""

from __future__ import annotations

import functools
import logging
import re
from dataclasses import dataclass
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError

from htmlflow.errors import SelectorParseError

logger = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).parent / "selector.lark"

LOGICAL_PSEUDOS = frozenset({"is", "where", "has", "not"})
GLOBAL_ELEMENTS = frozenset({"html", "body"})

_ESCAPE_RE = re.compile(r"\\(?:([0-9a-fA-F]{1,6})\s?|(.))")
_LOGICAL_RE = re.compile(r":(?:is|where|has|not)\([^)]+\)", re.IGNORECASE)
_GLOBAL_RE = re.compile(r"^(?:html|body|\*|:root)", re.IGNORECASE)


def _unescape(raw: str) -> str:
    """Resolve CSS escapes (``\\:``, ``\\31 ``) in an identifier."""

    def replace(match: re.Match[str]) -> str:
        if match.group(1):
            return chr(int(match.group(1), 16))
        return match.group(2)

    return _ESCAPE_RE.sub(replace, raw)


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SimpleSelector:
    """One simple selector inside a compound.

    ``kind`` is one of: type, universal, class, id, attribute, pseudo-class,
    pseudo-element, function. ``argument`` holds the raw text between the
    parentheses of a functional pseudo-class.
    """

    kind: str
    value: str
    argument: str = ""


@dataclass(frozen=True)
class CompoundSelector:
    parts: tuple[SimpleSelector, ...]

    def has(self, kind: str, value: str | None = None) -> bool:
        return any(
            p.kind == kind and (value is None or p.value == value) for p in self.parts
        )


@dataclass(frozen=True)
class ComplexSelector:
    """Compounds joined by combinators (``" "``, ``">"``, ``"+"``, ``"~"``)."""

    compounds: tuple[CompoundSelector, ...]
    combinators: tuple[str, ...] = ()

    def parts(self) -> list[SimpleSelector]:
        return [p for c in self.compounds for p in c.parts]


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class SelectorTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into selector dataclasses."""

    def type_selector(self, items: list[Token]) -> SimpleSelector:
        return SimpleSelector("type", _unescape(str(items[0])).lower())

    def universal(self, items: list[Token]) -> SimpleSelector:
        return SimpleSelector("universal", "*")

    def class_selector(self, items: list[Token]) -> SimpleSelector:
        return SimpleSelector("class", _unescape(str(items[0])))

    def id_selector(self, items: list[Token]) -> SimpleSelector:
        return SimpleSelector("id", _unescape(str(items[0])))

    def attribute_selector(self, items: list[Token]) -> SimpleSelector:
        return SimpleSelector("attribute", str(items[0]).strip())

    def pseudo_element(self, items: list[Token]) -> SimpleSelector:
        return SimpleSelector("pseudo-element", str(items[0]).lower())

    def pseudo_class(self, items: list[Token]) -> SimpleSelector:
        return SimpleSelector("pseudo-class", str(items[0]).lower())

    def functional_pseudo(self, items: list[object]) -> SimpleSelector:
        return SimpleSelector("function", str(items[0]).lower(), str(items[1]).strip())

    def argument(self, items: list[object]) -> str:
        # Nested arguments come back as plain strings; restore their parens.
        return "".join(str(i) if isinstance(i, Token) else f"({i})" for i in items)

    def combinator(self, items: list[Token]) -> str:
        return str(items[0])

    def descendant(self, items: list[Token]) -> str:
        return " "

    def compound(self, items: list[SimpleSelector]) -> CompoundSelector:
        return CompoundSelector(tuple(items))

    def complex(self, items: list[object]) -> ComplexSelector:
        compounds = tuple(i for i in items if isinstance(i, CompoundSelector))
        combinators = tuple(i for i in items if isinstance(i, str))
        return ComplexSelector(compounds, combinators)

    def start(self, items: list[ComplexSelector]) -> tuple[ComplexSelector, ...]:
        return tuple(items)


@functools.lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(GRAMMAR_PATH.read_text(encoding="utf-8"), parser="earley", start="start")


def parse_selector(text: str) -> tuple[ComplexSelector, ...]:
    """Parse a selector list into its complex selectors."""
    try:
        tree = _parser().parse(text.strip())
    except LarkError as e:
        column = getattr(e, "column", None)
        raise SelectorParseError(
            f"Cannot parse selector {text!r}: {e}", selector=text, column=column
        ) from e
    return SelectorTransformer().transform(tree)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SelectorInfo:
    """What the engine needs to know about one rule's selector text.

    Selectors the grammar cannot parse (``parsed`` is False) are classified
    from their raw text instead.
    """

    text: str
    selectors: tuple[ComplexSelector, ...] = ()
    parsed: bool = True

    @property
    def simple_class(self) -> str | None:
        """The class name if the selector is exactly one bare class."""
        if not self.parsed:
            text = self.text
            if text.startswith(".") and not any(c in text for c in " >:["):
                return text[1:]
            return None
        if len(self.selectors) != 1 or len(self.selectors[0].compounds) != 1:
            return None
        parts = self.selectors[0].compounds[0].parts
        if len(parts) == 1 and parts[0].kind == "class":
            return parts[0].value
        return None

    @property
    def bare_tag(self) -> str | None:
        """The tag name if the selector is exactly one type selector."""
        if not self.parsed:
            return self.text.lower() if self.text.isalnum() else None
        if len(self.selectors) != 1 or len(self.selectors[0].compounds) != 1:
            return None
        parts = self.selectors[0].compounds[0].parts
        if len(parts) == 1 and parts[0].kind == "type":
            return parts[0].value
        return None

    @property
    def has_attribute(self) -> bool:
        if not self.parsed:
            return "[" in self.text
        for selector in self.selectors:
            for part in selector.parts():
                if part.kind == "attribute":
                    return True
                if part.kind == "function" and "[" in part.argument:
                    return True
        return False

    @property
    def has_logical_pseudo(self) -> bool:
        """True for ``:is()``, ``:where()``, ``:has()`` or ``:not()`` with content."""
        if not self.parsed:
            return bool(_LOGICAL_RE.search(self.text))
        return any(
            part.kind == "function"
            and part.value in LOGICAL_PSEUDOS
            and part.argument
            for selector in self.selectors
            for part in selector.parts()
        )

    @property
    def is_root(self) -> bool:
        """True when the rule's subject is ``:root``."""
        if not self.parsed:
            return self.text.rstrip().endswith(":root")
        last = self.selectors[-1].compounds[-1]
        return last.has("pseudo-class", "root")

    @property
    def is_global(self) -> bool:
        """True when the rule starts at html, body, ``*`` or ``:root``."""
        if not self.parsed:
            return bool(_GLOBAL_RE.match(self.text))
        first = self.selectors[0].compounds[0]
        if first.has("universal") or first.has("pseudo-class", "root"):
            return True
        return any(first.has("type", name) for name in GLOBAL_ELEMENTS)


@functools.lru_cache(maxsize=2048)
def analyze_selector(text: str) -> SelectorInfo:
    """Parse *text* into a :class:`SelectorInfo`, falling back to raw text."""
    text = " ".join(text.split())
    try:
        return SelectorInfo(text=text, selectors=parse_selector(text))
    except SelectorParseError as exc:
        logger.debug("Classifying selector %r from text: %s", text, exc)
        return SelectorInfo(text=text, parsed=False)
