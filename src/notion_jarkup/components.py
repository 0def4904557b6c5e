"""jarkup component tree produced by the converter.

Components fall into two capability classes:

* :class:`BlockComponent` -- vertical-flow nodes (paragraphs, lists,
  tables, callouts, ...).
* :class:`InlineComponent` -- text-flow nodes (:class:`Text`,
  :class:`Icon`).

Every component carries an optional ``id`` (the source block id), a set
of kind-specific props and zero or more named slots.  Slot shapes that
the renderer relies on are checked on construction:

* a :class:`List` holds only :class:`ListItem`,
* a :class:`Table` header is ``None`` or exactly one :class:`TableRow`,
* a :class:`Table` body holds only :class:`TableRow`,
* a :class:`TableRow` holds only :class:`TableCell`.

:meth:`Component.to_dict` returns the jarkup JSON shape::

    {"type": "Paragraph", "inline": false, "id": "...",
     "props": {...}, "slots": {"default": [...]}}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Sequence

from notion_jarkup.errors import JarkupComponentShapeError

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ListStyle(str, Enum):
    UNORDERED = "unordered"
    ORDERED = "ordered"


class CalloutType(str, Enum):
    NOTE = "note"
    TIP = "tip"
    IMPORTANT = "important"
    WARNING = "warning"
    CAUTION = "caution"


# ---------------------------------------------------------------------------
# Base classes
# ---------------------------------------------------------------------------

def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _dump(value: Any) -> Any:
    if isinstance(value, Component):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list):
        return [_dump(v) for v in value]
    return value


class Component:
    """Base class of every jarkup node.

    Subclasses list their prop and slot field names in ``_props`` and
    ``_slots``; serialisation and equality are derived from those.
    """

    kind: ClassVar[str] = ""
    inline: ClassVar[bool] = False
    _props: ClassVar[tuple[str, ...]] = ()
    _slots: ClassVar[tuple[str, ...]] = ()

    id: str | None

    @property
    def props(self) -> dict[str, Any]:
        """Props with ``None`` values dropped."""
        return {
            name: getattr(self, name)
            for name in self._props
            if getattr(self, name) is not None
        }

    @property
    def slots(self) -> dict[str, list[Component]]:
        """Named slots with ``None`` slots dropped."""
        return {
            name: getattr(self, name)
            for name in self._slots
            if getattr(self, name) is not None
        }

    def to_dict(self) -> dict[str, Any]:
        """Return the jarkup JSON representation of this subtree."""
        out: dict[str, Any] = {"type": self.kind, "inline": self.inline}
        if self.id is not None:
            out["id"] = self.id
        props = self.props
        if props:
            out["props"] = {_camel(k): _dump(v) for k, v in props.items()}
        slots = self.slots
        if slots:
            out["slots"] = {k: _dump(v) for k, v in slots.items()}
        return out


class BlockComponent(Component):
    """A component that participates in vertical (block) flow."""


class InlineComponent(Component):
    """A component that participates in text flow."""

    inline: ClassVar[bool] = True


def _check_slot(
    owner: Component,
    slot: str,
    children: Sequence[Component],
    expected: type[Component],
) -> None:
    for child in children:
        if not isinstance(child, expected):
            raise JarkupComponentShapeError(
                message=(
                    f"{owner.kind}.{slot} accepts only {expected.kind} "
                    f"components, got {type(child).__name__}"
                ),
                context={
                    "component": owner.kind,
                    "slot": slot,
                    "expected": expected.kind,
                    "got": type(child).__name__,
                },
            )


# ---------------------------------------------------------------------------
# Inline components
# ---------------------------------------------------------------------------

@dataclass
class Text(InlineComponent):
    """A styled text span.

    ``katex=True`` renders ``text`` as inline math.  ``code`` and ``kbd``
    are mutually exclusive renderings of a code-annotated span.
    """

    kind: ClassVar[str] = "Text"
    _props: ClassVar[tuple[str, ...]] = (
        "text", "color", "background_color", "bold", "italic", "underline",
        "strikethrough", "katex", "code", "kbd", "href", "favicon",
    )

    text: str = ""
    color: str | None = None
    background_color: str | None = None
    bold: bool | None = None
    italic: bool | None = None
    underline: bool | None = None
    strikethrough: bool | None = None
    katex: bool | None = None
    code: bool | None = None
    kbd: bool | None = None
    href: str | None = None
    favicon: str | None = None
    id: str | None = None


@dataclass
class Icon(InlineComponent):
    kind: ClassVar[str] = "Icon"
    _props: ClassVar[tuple[str, ...]] = ("src", "alt")

    src: str = ""
    alt: str | None = None
    id: str | None = None


# ---------------------------------------------------------------------------
# Block components
# ---------------------------------------------------------------------------

@dataclass
class Paragraph(BlockComponent):
    kind: ClassVar[str] = "Paragraph"
    _slots: ClassVar[tuple[str, ...]] = ("default",)

    default: list[InlineComponent] = field(default_factory=list)
    id: str | None = None


@dataclass
class Heading(BlockComponent):
    kind: ClassVar[str] = "Heading"
    _props: ClassVar[tuple[str, ...]] = ("level",)
    _slots: ClassVar[tuple[str, ...]] = ("default",)

    level: int = 1
    default: list[InlineComponent] = field(default_factory=list)
    id: str | None = None

    def __post_init__(self) -> None:
        if self.level not in (1, 2, 3):
            raise JarkupComponentShapeError(
                message=f"Heading level must be 1, 2 or 3, got {self.level}",
                context={"component": self.kind, "level": self.level},
            )


@dataclass
class ListItem(BlockComponent):
    kind: ClassVar[str] = "ListItem"
    _slots: ClassVar[tuple[str, ...]] = ("default",)

    default: list[InlineComponent] = field(default_factory=list)
    id: str | None = None


@dataclass
class List(BlockComponent):
    """An ordered or unordered list.

    ``list_style=None`` means "style not recorded"; such a list accepts
    items of either style when runs are merged.
    """

    kind: ClassVar[str] = "List"
    _props: ClassVar[tuple[str, ...]] = ("list_style",)
    _slots: ClassVar[tuple[str, ...]] = ("default",)

    list_style: ListStyle | None = None
    default: list[ListItem] = field(default_factory=list)
    id: str | None = None

    def __post_init__(self) -> None:
        _check_slot(self, "default", self.default, ListItem)

    def append_item(self, item: ListItem) -> None:
        _check_slot(self, "default", [item], ListItem)
        self.default.append(item)


@dataclass
class TableCell(BlockComponent):
    kind: ClassVar[str] = "TableCell"
    _slots: ClassVar[tuple[str, ...]] = ("default",)

    default: list[InlineComponent] = field(default_factory=list)
    id: str | None = None


@dataclass
class TableRow(BlockComponent):
    kind: ClassVar[str] = "TableRow"
    _slots: ClassVar[tuple[str, ...]] = ("default",)

    default: list[TableCell] = field(default_factory=list)
    id: str | None = None

    def __post_init__(self) -> None:
        _check_slot(self, "default", self.default, TableCell)


@dataclass
class Table(BlockComponent):
    kind: ClassVar[str] = "Table"
    _props: ClassVar[tuple[str, ...]] = ("has_column_header", "has_row_header", "caption")
    _slots: ClassVar[tuple[str, ...]] = ("header", "body")

    has_column_header: bool | None = None
    has_row_header: bool | None = None
    caption: str | None = None
    header: list[TableRow] | None = None
    body: list[TableRow] = field(default_factory=list)
    id: str | None = None

    def __post_init__(self) -> None:
        if self.header is not None:
            if len(self.header) != 1:
                raise JarkupComponentShapeError(
                    message=f"Table.header must hold exactly one row, got {len(self.header)}",
                    context={"component": self.kind, "slot": "header"},
                )
            _check_slot(self, "header", self.header, TableRow)
        _check_slot(self, "body", self.body, TableRow)


@dataclass
class Callout(BlockComponent):
    kind: ClassVar[str] = "Callout"
    _props: ClassVar[tuple[str, ...]] = ("type",)
    _slots: ClassVar[tuple[str, ...]] = ("default",)

    type: CalloutType | None = None
    default: list[Component] = field(default_factory=list)
    id: str | None = None


@dataclass
class BlockQuote(BlockComponent):
    kind: ClassVar[str] = "BlockQuote"
    _slots: ClassVar[tuple[str, ...]] = ("default",)

    default: list[Component] = field(default_factory=list)
    id: str | None = None


@dataclass
class Toggle(BlockComponent):
    kind: ClassVar[str] = "Toggle"
    _slots: ClassVar[tuple[str, ...]] = ("default", "summary")

    default: list[Component] = field(default_factory=list)
    summary: list[InlineComponent] = field(default_factory=list)
    id: str | None = None


@dataclass
class Divider(BlockComponent):
    kind: ClassVar[str] = "Divider"

    id: str | None = None


@dataclass
class CodeBlock(BlockComponent):
    """A code listing; the ``default`` slot is the caption."""

    kind: ClassVar[str] = "CodeBlock"
    _props: ClassVar[tuple[str, ...]] = ("code", "language")
    _slots: ClassVar[tuple[str, ...]] = ("default",)

    code: str = ""
    language: str = "plain text"
    default: list[InlineComponent] = field(default_factory=list)
    id: str | None = None


@dataclass
class Katex(BlockComponent):
    """A display-mode equation."""

    kind: ClassVar[str] = "Katex"
    _props: ClassVar[tuple[str, ...]] = ("expression",)

    expression: str = ""
    id: str | None = None


@dataclass
class Image(BlockComponent):
    kind: ClassVar[str] = "Image"
    _props: ClassVar[tuple[str, ...]] = ("src", "alt")

    src: str = ""
    alt: str | None = None
    id: str | None = None


@dataclass
class File(BlockComponent):
    kind: ClassVar[str] = "File"
    _props: ClassVar[tuple[str, ...]] = ("src", "name")

    src: str = ""
    name: str | None = None
    id: str | None = None


@dataclass
class Bookmark(BlockComponent):
    kind: ClassVar[str] = "Bookmark"
    _props: ClassVar[tuple[str, ...]] = ("url", "title", "description", "image")

    url: str = ""
    title: str | None = None
    description: str | None = None
    image: str | None = None
    id: str | None = None


@dataclass
class Unsupported(BlockComponent):
    """Placeholder for a source block with no jarkup equivalent."""

    kind: ClassVar[str] = "Unsupported"
    _props: ClassVar[tuple[str, ...]] = ("details",)

    details: str = ""
    id: str | None = None
