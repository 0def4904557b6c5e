"""Inline conversion: Notion rich-text spans to jarkup inline components.

* ``text`` spans become :class:`Text` with colours, annotations, links and
  a best-effort link favicon.
* ``equation`` spans become :class:`Text` with ``katex=True``.
* ``link_mention`` mentions become linked :class:`Text`; ``custom_emoji``
  mentions become :class:`Icon`.  Every other mention kind is dropped.
"""

from __future__ import annotations

from typing import Any

from notion_jarkup.components import Icon, InlineComponent, Text
from notion_jarkup.enrich import MetadataEnricher
from notion_jarkup.models import (
    EquationSpan,
    MentionSpan,
    MentionType,
    RichTextSpan,
    TextSpan,
    parse_rich_text,
)

# Notion colour name -> CSS colour.  Background variants share the hex
# of their foreground counterpart.
FOREGROUND_COLORS: dict[str, str] = {
    "blue": "#6987b8",
    "brown": "#8b4c3f",
    "gray": "#868e9c",
    "green": "#59b57c",
    "orange": "#bf7e71",
    "pink": "#c9699e",
    "purple": "#9771bd",
    "red": "#b36472",
    "yellow": "#b8a36e",
}

BACKGROUND_COLORS: dict[str, str] = {
    f"{name}_background": hex_value for name, hex_value in FOREGROUND_COLORS.items()
}

# Lower-cased names rendered as keyboard keys when code-annotated.
KEYBOARD_KEYS: frozenset[str] = frozenset({
    # modifiers
    "ctrl", "alt", "shift", "cmd", "option", "meta", "win", "fn",
    # editing and navigation
    "enter", "return", "tab", "esc", "space", "backspace", "delete",
    "insert", "home", "end", "pageup", "pagedown",
    # locks and system
    "capslock", "numlock", "scrolllock", "menu", "pause",
    # function keys
    "f1", "f2", "f3", "f4", "f5", "f6", "f7", "f8", "f9", "f10", "f11", "f12",
})

_DROPPED_MENTIONS: frozenset[MentionType] = frozenset({
    MentionType.USER,
    MentionType.DATE,
    MentionType.LINK_PREVIEW,
    MentionType.TEMPLATE_MENTION,
    MentionType.PAGE,
    MentionType.DATABASE,
})


def is_keyboard_key(text: str) -> bool:
    """Return ``True`` if a code-annotated *text* should render as a key.

    A single character counts as a key, as does any name in
    :data:`KEYBOARD_KEYS` (case-insensitive).
    """
    return len(text) == 1 or text.lower() in KEYBOARD_KEYS


class RichTextConverter:
    """Convert rich-text spans into inline components.

    Parameters
    ----------
    enricher:
        Used to look up favicons for linked text.
    """

    def __init__(self, enricher: MetadataEnricher) -> None:
        self._enricher = enricher

    async def convert_raw(self, raw: list[dict[str, Any]] | None) -> list[InlineComponent]:
        """Parse a raw Notion ``rich_text`` array and convert it.

        Raises
        ------
        JarkupParseError
            If a span is structurally invalid.
        """
        return await self.convert(parse_rich_text(raw))

    async def convert(self, spans: list[RichTextSpan]) -> list[InlineComponent]:
        """Convert *spans* in order.  Dropped mentions leave no output."""
        components: list[InlineComponent] = []

        for span in spans:
            if isinstance(span, TextSpan):
                components.append(await self._convert_text(span))
            elif isinstance(span, EquationSpan):
                components.append(Text(text=span.expression, katex=True))
            else:
                component = await self._convert_mention(span)
                if component is not None:
                    components.append(component)

        return components

    async def _convert_text(self, span: TextSpan) -> Text:
        ann = span.annotations

        code = False
        kbd = False
        if ann.code:
            if is_keyboard_key(span.plain_text):
                kbd = True
            else:
                code = True

        favicon = None
        if span.link:
            favicon = await self._enricher.fetch_favicon(span.link)

        return Text(
            text=span.plain_text,
            color=FOREGROUND_COLORS.get(ann.color),
            background_color=BACKGROUND_COLORS.get(ann.color),
            bold=ann.bold,
            italic=ann.italic,
            underline=ann.underline,
            strikethrough=ann.strikethrough,
            code=code,
            kbd=kbd,
            href=span.link,
            favicon=favicon,
        )

    async def _convert_mention(self, span: MentionSpan) -> InlineComponent | None:
        if span.mention_type in _DROPPED_MENTIONS:
            return None

        if span.mention_type is MentionType.LINK_MENTION:
            href = span.target.get("href") or None
            favicon = await self._enricher.fetch_favicon(href) if href else None
            return Text(text=span.plain_text, href=href, favicon=favicon)

        # custom_emoji
        return Icon(
            src=span.target.get("url", ""),
            alt=span.target.get("name"),
        )
