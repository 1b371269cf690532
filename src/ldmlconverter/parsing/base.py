"""LDML handler base.

Handlers receive parser-target callbacks (``start``, ``data``,
``end``, ``close``) and accumulate a raw key/value map. The base class owns
the element stack, character accumulation and the filtering every handler
shares:

- Draft filtering: an element whose ``draft`` attribute is below the
  configured threshold is ignored together with its whole subtree.
- Alternate filtering: elements carrying an ``alt`` attribute are
  ignored (CLDR uses them for variant spellings the runtime never asks for).
- Subclass filtering: ``accept`` may veto further elements.

Subclasses implement ``start_element`` and ``end_element``; both only see
accepted elements.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from ldmlconverter.enums import DraftType
from ldmlconverter.types import RawLocaleMap, RawValue

__all__ = ["ElementFrame", "LDMLHandler"]


@dataclass(slots=True)
class ElementFrame:
    """One open element on the handler's stack.

    Attributes:
        name: Element name
        attrs: Element attributes
        ignored: True if this element or an ancestor was filtered out
    """

    name: str
    attrs: dict[str, str] = field(default_factory=dict)
    ignored: bool = False

    @property
    def type(self) -> str | None:
        """The ``type`` attribute, the usual LDML discriminator."""
        return self.attrs.get("type")


class LDMLHandler:
    """Base class of all LDML parser targets.

    Attributes:
        draft: Minimum accepted draft level
        ignore_alt: Drop elements that carry an ``alt`` attribute
    """

    ignore_alt: bool = True

    def __init__(self, *, draft: DraftType = DraftType.CONTRIBUTED) -> None:
        self.draft = draft
        self._stack: list[ElementFrame] = []
        self._chars: list[str] = []
        self._data: RawLocaleMap = {}

    # -- lxml parser target protocol -------------------------------------

    def start(self, tag: str, attrib: Mapping[str, str]) -> None:
        attrs = dict(attrib)
        parent_ignored = bool(self._stack) and self._stack[-1].ignored
        frame = ElementFrame(tag, attrs, parent_ignored or not self._passes_filters(tag, attrs))
        self._stack.append(frame)
        self._chars.clear()
        if not frame.ignored:
            self.start_element(frame)

    def data(self, data: str) -> None:
        if self._stack and not self._stack[-1].ignored:
            self._chars.append(data)

    def end(self, tag: str) -> None:  # noqa: ARG002
        frame = self._stack.pop()
        text = "".join(self._chars)
        self._chars.clear()
        if not frame.ignored:
            self.end_element(frame, text)

    def close(self) -> RawLocaleMap:
        return self._data

    # -- subclass hooks -----------------------------------------------------

    def accept(self, name: str, attrs: Mapping[str, str]) -> bool:  # noqa: ARG002
        """Return False to ignore an element and its subtree."""
        return True

    def start_element(self, frame: ElementFrame) -> None:
        """Called for each accepted element start."""

    def end_element(self, frame: ElementFrame, text: str) -> None:
        """Called for each accepted element end with its character data."""

    # -- helpers ------------------------------------------------------------

    @property
    def data_map(self) -> RawLocaleMap:
        """The accumulated raw map."""
        return self._data

    @property
    def stack(self) -> list[ElementFrame]:
        """Open elements, outermost first (the current element is last)."""
        return self._stack

    def get(self, key: str) -> RawValue | None:
        return self._data.get(key)

    def put(self, key: str, value: RawValue) -> None:
        self._data[key] = value

    def put_if_absent(self, key: str, value: RawValue) -> None:
        self._data.setdefault(key, value)

    def append_words(self, key: str, words: str) -> None:
        """Append space-separated words to a string entry."""
        previous = self._data.get(key)
        if isinstance(previous, str) and previous:
            self._data[key] = f"{previous} {words}"
        else:
            self._data[key] = words

    def ancestor(self, name: str) -> ElementFrame | None:
        """Nearest open element with the given name."""
        for frame in reversed(self._stack):
            if frame.name == name:
                return frame
        return None

    def ancestor_type(self, name: str) -> str | None:
        frame = self.ancestor(name)
        return frame.type if frame is not None else None

    def _passes_filters(self, name: str, attrs: Mapping[str, str]) -> bool:
        draft = attrs.get("draft")
        if draft is not None:
            try:
                level = DraftType(draft)
            except ValueError:
                level = DraftType.UNCONFIRMED
            if not self.draft.accepts(level):
                return False
        if self.ignore_alt and "alt" in attrs:
            return False
        return self.accept(name, attrs)
