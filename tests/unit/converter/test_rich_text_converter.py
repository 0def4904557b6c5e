"""Tests for RichTextConverter: colours, annotations, links and mentions."""

from __future__ import annotations

import pytest

from notion_jarkup.components import Icon, Text
from notion_jarkup.converter.rich_text import (
    BACKGROUND_COLORS,
    FOREGROUND_COLORS,
    is_keyboard_key,
)
from notion_jarkup.errors import JarkupParseError
from notion_jarkup.models import Annotations, EquationSpan, TextSpan


def text_span(content, link=None, **ann):
    annotations = {"color": "default"}
    annotations.update(ann)
    return {
        "type": "text",
        "text": {"content": content, "link": {"url": link} if link else None},
        "plain_text": content,
        "annotations": annotations,
        "href": link,
    }


def mention_span(kind, plain_text, payload):
    return {
        "type": "mention",
        "mention": {"type": kind, kind: payload},
        "plain_text": plain_text,
        "annotations": {"color": "default"},
    }


def equation_span(expression):
    return {
        "type": "equation",
        "equation": {"expression": expression},
        "plain_text": expression,
        "annotations": {"color": "default"},
    }


# ---------------------------------------------------------------------------
# Keyboard heuristic
# ---------------------------------------------------------------------------

class TestKeyboardHeuristic:
    @pytest.mark.parametrize("text", ["a", "K", "/", "Ctrl", "SHIFT", "esc", "F5", "f12", "PageUp"])
    def test_keys(self, text):
        assert is_keyboard_key(text) is True

    @pytest.mark.parametrize("text", ["hello", "ls -la", "", "ctrl+c", "f13"])
    def test_not_keys(self, text):
        assert is_keyboard_key(text) is False


# ---------------------------------------------------------------------------
# Text spans
# ---------------------------------------------------------------------------

class TestTextSpans:
    async def test_plain_text(self, rich_text):
        [text] = await rich_text.convert_raw([text_span("Hello")])
        assert text.text == "Hello"
        assert text.bold is False
        assert text.katex is None
        assert text.href is None
        assert text.favicon is None

    async def test_order_preserved(self, rich_text):
        result = await rich_text.convert_raw([text_span("a b"), text_span("c"), text_span("d e")])
        assert [t.text for t in result] == ["a b", "c", "d e"]

    async def test_empty_and_none(self, rich_text):
        assert await rich_text.convert_raw([]) == []
        assert await rich_text.convert_raw(None) == []

    async def test_annotations_copied(self, rich_text):
        [text] = await rich_text.convert_raw([
            text_span("x y", bold=True, italic=True, underline=True, strikethrough=True),
        ])
        assert text.bold and text.italic and text.underline and text.strikethrough
        assert text.code is False
        assert text.kbd is False

    @pytest.mark.parametrize("name", sorted(FOREGROUND_COLORS))
    async def test_foreground_colour(self, rich_text, name):
        [text] = await rich_text.convert_raw([text_span("x", color=name)])
        assert text.color == FOREGROUND_COLORS[name]
        assert text.background_color is None

    @pytest.mark.parametrize("name", sorted(BACKGROUND_COLORS))
    async def test_background_colour(self, rich_text, name):
        [text] = await rich_text.convert_raw([text_span("x", color=name)])
        assert text.background_color == BACKGROUND_COLORS[name]
        assert text.color is None

    def test_background_shares_foreground_hex(self):
        assert BACKGROUND_COLORS["red_background"] == FOREGROUND_COLORS["red"] == "#b36472"

    async def test_default_colour_sets_nothing(self, rich_text):
        [text] = await rich_text.convert_raw([text_span("x", color="default")])
        assert text.color is None
        assert text.background_color is None

    async def test_code_single_character_is_kbd(self, rich_text):
        [text] = await rich_text.convert_raw([text_span("a", code=True)])
        assert text.kbd is True
        assert text.code is False

    async def test_code_key_name_is_kbd(self, rich_text):
        [text] = await rich_text.convert_raw([text_span("Ctrl", code=True)])
        assert text.kbd is True
        assert text.code is False

    async def test_code_word_is_code(self, rich_text):
        [text] = await rich_text.convert_raw([text_span("hello", code=True)])
        assert text.code is True
        assert text.kbd is False


# ---------------------------------------------------------------------------
# Links
# ---------------------------------------------------------------------------

class TestLinks:
    async def test_link_with_favicon(self, rich_text, fetcher):
        fetcher.pages["https://example.com/docs/page"] = (
            '<html><head><link rel="icon" href="/fav.ico"></head></html>'
        )
        [text] = await rich_text.convert_raw([text_span("docs", link="https://example.com/docs/page")])
        assert text.href == "https://example.com/docs/page"
        assert text.favicon == "https://example.com/fav.ico"

    async def test_link_favicon_failure_keeps_text(self, rich_text):
        [text] = await rich_text.convert_raw([text_span("dead", link="https://gone.invalid/")])
        assert text.text == "dead"
        assert text.href == "https://gone.invalid/"
        assert text.favicon is None

    async def test_no_link_no_fetch(self, rich_text, fetcher):
        await rich_text.convert_raw([text_span("plain")])
        assert fetcher.calls == []


# ---------------------------------------------------------------------------
# Equations and mentions
# ---------------------------------------------------------------------------

class TestEquationsAndMentions:
    async def test_inline_equation(self, rich_text):
        [text] = await rich_text.convert_raw([equation_span("a^2+b^2")])
        assert text == Text(text="a^2+b^2", katex=True)

    @pytest.mark.parametrize(
        ("kind", "payload"),
        [
            ("user", {"object": "user", "id": "u1"}),
            ("date", {"start": "2024-01-01", "end": None}),
            ("page", {"id": "p1"}),
            ("database", {"id": "d1"}),
            ("link_preview", {"url": "https://example.com"}),
            ("template_mention", {"type": "template_mention_date"}),
        ],
    )
    async def test_dropped_mentions(self, rich_text, kind, payload):
        result = await rich_text.convert_raw([
            text_span("before "),
            mention_span(kind, "@thing", payload),
            text_span(" after"),
        ])
        assert [t.text for t in result] == ["before ", " after"]

    async def test_link_mention(self, rich_text, fetcher):
        fetcher.pages["https://github.com/org/repo"] = (
            '<link rel="shortcut icon" href="https://github.githubassets.com/favicon.svg">'
        )
        [text] = await rich_text.convert_raw([
            mention_span("link_mention", "org/repo", {"href": "https://github.com/org/repo"}),
        ])
        assert text.text == "org/repo"
        assert text.href == "https://github.com/org/repo"
        assert text.favicon == "https://github.githubassets.com/favicon.svg"

    async def test_custom_emoji(self, rich_text):
        [icon] = await rich_text.convert_raw([
            mention_span("custom_emoji", ":party:", {
                "id": "e1", "name": "party", "url": "https://cdn.example.com/party.png",
            }),
        ])
        assert icon == Icon(src="https://cdn.example.com/party.png", alt="party")

    async def test_unknown_mention_raises(self, rich_text):
        with pytest.raises(JarkupParseError) as exc_info:
            await rich_text.convert_raw([mention_span("hologram", "?", {})])
        assert exc_info.value.context["mention_type"] == "hologram"

    async def test_unknown_span_type_raises(self, rich_text):
        with pytest.raises(JarkupParseError):
            await rich_text.convert_raw([{"type": "sticker", "plain_text": "?"}])


class TestConvertParsedSpans:
    async def test_convert_accepts_parsed_spans(self, rich_text):
        spans = [
            TextSpan(plain_text="x", annotations=Annotations(bold=True)),
            EquationSpan(expression="y"),
        ]
        result = await rich_text.convert(spans)
        assert result[0].text == "x"
        assert result[0].bold is True
        assert result[0].italic is False
        assert result[1] == Text(text="y", katex=True)
