"""Tests for jarkup component shapes and serialisation."""

from __future__ import annotations

import pytest

from notion_jarkup.components import (
    BlockComponent,
    Bookmark,
    Callout,
    CalloutType,
    Divider,
    Heading,
    Icon,
    InlineComponent,
    List,
    ListItem,
    ListStyle,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    Text,
    Toggle,
    Unsupported,
)
from notion_jarkup.errors import ErrorCode, JarkupComponentShapeError


class TestCapabilities:
    def test_inline_components(self):
        assert Text().inline is True
        assert Icon().inline is True
        assert isinstance(Text(), InlineComponent)

    def test_block_components(self):
        for component in (Paragraph(), Divider(), Table(), Callout(), Unsupported()):
            assert component.inline is False
            assert isinstance(component, BlockComponent)


class TestShapeChecks:
    def test_list_rejects_non_items(self):
        with pytest.raises(JarkupComponentShapeError) as exc_info:
            List(list_style=ListStyle.UNORDERED, default=[Paragraph()])
        assert exc_info.value.code == ErrorCode.COMPONENT_SHAPE
        assert exc_info.value.context["slot"] == "default"

    def test_append_item_rejects_non_items(self):
        lst = List(list_style=ListStyle.ORDERED)
        with pytest.raises(JarkupComponentShapeError):
            lst.append_item(Paragraph())  # type: ignore[arg-type]

    def test_append_item(self):
        lst = List(list_style=ListStyle.ORDERED, default=[ListItem(id="a")])
        lst.append_item(ListItem(id="b"))
        assert [i.id for i in lst.default] == ["a", "b"]

    def test_table_header_must_be_single_row(self):
        with pytest.raises(JarkupComponentShapeError):
            Table(header=[TableRow(), TableRow()])
        with pytest.raises(JarkupComponentShapeError):
            Table(header=[])

    def test_table_header_must_be_row(self):
        with pytest.raises(JarkupComponentShapeError):
            Table(header=[TableCell()])  # type: ignore[list-item]

    def test_table_body_rows_only(self):
        with pytest.raises(JarkupComponentShapeError):
            Table(body=[TableRow(), Paragraph()])  # type: ignore[list-item]

    def test_row_cells_only(self):
        with pytest.raises(JarkupComponentShapeError):
            TableRow(default=[Paragraph()])  # type: ignore[list-item]

    @pytest.mark.parametrize("level", [0, 4])
    def test_heading_level(self, level):
        with pytest.raises(JarkupComponentShapeError):
            Heading(level=level)


class TestToDict:
    def test_text_camel_case_props_drop_none(self):
        text = Text(text="hi", background_color="#b36472", bold=True)
        assert text.to_dict() == {
            "type": "Text",
            "inline": True,
            "props": {"text": "hi", "backgroundColor": "#b36472", "bold": True},
        }

    def test_paragraph_with_id_and_slot(self):
        para = Paragraph(default=[Text(text="x")], id="p1")
        assert para.to_dict() == {
            "type": "Paragraph",
            "inline": False,
            "id": "p1",
            "slots": {"default": [{"type": "Text", "inline": True, "props": {"text": "x"}}]},
        }

    def test_enums_serialise_to_values(self):
        assert List(list_style=ListStyle.ORDERED).to_dict()["props"] == {"listStyle": "ordered"}
        assert Callout(type=CalloutType.TIP).to_dict()["props"] == {"type": "tip"}

    def test_table_header_slot_omitted_when_none(self):
        table = Table(has_column_header=False, body=[TableRow(id="r")])
        out = table.to_dict()
        assert set(out["slots"]) == {"body"}
        assert out["props"] == {"hasColumnHeader": False}

    def test_toggle_slots(self):
        toggle = Toggle(default=[Divider()], summary=[Text(text="s")])
        assert set(toggle.to_dict()["slots"]) == {"default", "summary"}

    def test_divider_minimal(self):
        assert Divider().to_dict() == {"type": "Divider", "inline": False}

    def test_bookmark_partial_preview(self):
        out = Bookmark(url="https://example.com", title="T").to_dict()
        assert out["props"] == {"url": "https://example.com", "title": "T"}

    def test_unsupported(self):
        out = Unsupported(details="Notion: `Video Block` is not supported.", id="v").to_dict()
        assert out["props"]["details"] == "Notion: `Video Block` is not supported."
        assert out["id"] == "v"
