"""Match criteria and the values produced by evaluating them.

A criteria object describes *which* node a click targets. It is rendered into
a JSON-serialisable descriptor that the page evaluates inside the document,
and into a short human description used in logs and error messages.
"""

from __future__ import annotations

import dataclasses
import re
from typing import Any, ClassVar, Union

_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str | None) -> str:
    """Collapse whitespace runs, trim and lowercase.

    Mirrors the in-document normalisation so that ``"submit now"`` matches
    rendered text ``"  Submit   Now "``.
    """
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip().lower()


def _require_needle(text: str) -> str:
    needle = normalize_text(text)
    if not needle:
        raise ValueError("Search text must contain at least one non-whitespace character")
    return needle


@dataclasses.dataclass(frozen=True)
class TextContains:
    """Visible text contains ``needle``; prefers real controls over wrappers."""

    needle: str
    kind: ClassVar[str] = "text"

    def __post_init__(self) -> None:
        _require_needle(self.needle)

    def descriptor(self) -> dict[str, Any]:
        return {"kind": self.kind, "needle": normalize_text(self.needle)}

    def describe(self) -> str:
        return f'text "{self.needle}"'


@dataclasses.dataclass(frozen=True)
class AttributeEquals:
    """Attribute ``name`` equals ``value`` exactly (no normalisation)."""

    name: str
    value: str
    kind: ClassVar[str] = "attribute"

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Attribute name must not be empty")

    def descriptor(self) -> dict[str, Any]:
        return {"kind": self.kind, "name": self.name, "value": self.value}

    def describe(self) -> str:
        return f'[{self.name}="{self.value}"]'


@dataclasses.dataclass(frozen=True)
class SelectorIndex:
    """The 1-based ``index``-th element matching a CSS ``selector``.

    ``index`` is clamped to a minimum of 1.
    """

    selector: str
    index: int = 1
    kind: ClassVar[str] = "selector_index"

    def __post_init__(self) -> None:
        if not self.selector:
            raise ValueError("Selector must not be empty")
        object.__setattr__(self, "index", max(1, int(self.index)))

    def descriptor(self) -> dict[str, Any]:
        return {"kind": self.kind, "selector": self.selector, "index": self.index}

    def describe(self) -> str:
        return f"{self.selector} #{self.index}"


@dataclasses.dataclass(frozen=True)
class TextContainsCheckbox:
    """The checkbox associated with the element whose visible text contains ``needle``."""

    needle: str
    kind: ClassVar[str] = "text_checkbox"

    def __post_init__(self) -> None:
        _require_needle(self.needle)

    def descriptor(self) -> dict[str, Any]:
        return {"kind": self.kind, "needle": normalize_text(self.needle)}

    def describe(self) -> str:
        return f'checkbox for text "{self.needle}"'


MatchCriteria = Union[TextContains, AttributeEquals, SelectorIndex, TextContainsCheckbox]


_IDENT_UNSAFE = re.compile(r"[^A-Za-z0-9_-]")


def css_identifier(name: str) -> str:
    """Backslash-escape every character of ``name`` that is not ``[A-Za-z0-9_-]``."""
    escaped = _IDENT_UNSAFE.sub(lambda m: "\\" + m.group(0), name)
    # An identifier may not start with a digit, or with a hyphen followed by a digit
    if re.match(r"-?[0-9]", escaped):
        prefix = "-" if escaped.startswith("-") else ""
        digit = escaped[len(prefix)]
        escaped = f"{prefix}\\{ord(digit):x} {escaped[len(prefix) + 1:]}"
    return escaped


def attribute_selector(name: str, value: str) -> str:
    """Build ``[name="value"]`` with the name escaped as a CSS identifier and the value quoted."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'[{css_identifier(name)}="{escaped}"]'


@dataclasses.dataclass
class Candidate:
    """A node found during polling, with diagnostic metadata."""

    node: Any
    tag: str = ""
    text: str = ""
    path: str = ""

    def summary(self) -> str:
        text = self.text if len(self.text) <= 60 else self.text[:57] + "..."
        return f'<{self.tag}> with text "{text}" at {self.path}'


@dataclasses.dataclass
class MatchResult:
    """What one evaluation of the criteria against the document found."""

    candidate: Candidate | None = None
    text_matched: bool = False  # Checkbox search: text found, no checkbox
    match_count: int = 0  # Structural matches seen (index strategies)

    @property
    def matched(self) -> bool:
        return self.candidate is not None
