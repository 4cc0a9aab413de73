from __future__ import annotations

import math

import pytest

from pdfbuilder import Document, PageSize, TextAlign, parse_pdf, rgb


def small_document() -> Document:
    # 300 x 300 page, 72pt margins: content runs from y=72 to y=228
    return Document(page_size=PageSize(300, 300)).add_page()


def page_runs(doc: Document) -> list:
    pdf = parse_pdf(doc.to_bytes())
    return [pdf.text_runs(page) for page in pdf.page_objects()]


def test_overflow_repeats_header_on_every_new_page() -> None:
    doc = small_document()
    row_height = 12 + 2 * 4
    # room for the header plus exactly three rows before the bottom margin
    doc.set_pos(72, 228 - 4 * row_height)

    table = doc.new_table([80, 76]).header("Item", "Qty")
    for number in range(1, 11):
        table.row(f"item {number}", number)
    table.draw()

    rows_per_page = math.floor((228 - 72) / row_height) - 1
    assert rows_per_page == 6
    assert doc.page_count == 1 + math.ceil((10 - 3) / rows_per_page)

    runs = page_runs(doc)
    assert runs[0] == ["Item", "Qty", "item 1", "1", "item 2", "2", "item 3", "3"]
    assert runs[1][:4] == ["Item", "Qty", "item 4", "4"]
    assert runs[1].count("Item") == 1
    assert runs[2] == ["Item", "Qty", "item 10", "10"]


def test_header_uses_bold_font_and_background() -> None:
    doc = small_document()
    doc.new_table([100]).header("Head").row("body").draw()

    content = bytes(doc.current_page.content).decode("ascii")
    assert "0.863 0.863 0.863 rg" in content
    assert "/Helvetica-Bold 12.00 Tf" in content
    assert doc.current_page.fonts == ["Helvetica-Bold", "Helvetica"]


def test_cursor_moves_below_table_and_font_is_restored() -> None:
    doc = small_document()
    doc.set_pos(80, 100)
    doc.new_table([50, 50]).set_font("Courier", 10).header("a", "b").row("1", "2").draw()

    assert doc.get_pos() == (80, pytest.approx(100 + 2 * (10 + 8)))
    assert (doc.font_name, doc.font_size) == ("Helvetica", 12)
    assert "/Courier-Bold 10.00 Tf" in bytes(doc.current_page.content).decode("ascii")


def test_column_alignment() -> None:
    doc = Document().add_page()
    table = doc.new_table([100, 100, 100])
    table.set_column_align(1, TextAlign.CENTER).set_column_align(2, TextAlign.RIGHT)
    table.set_column_align(7, TextAlign.RIGHT)
    table.row("abc", "abc", "abc").draw()

    content = bytes(doc.current_page.content).decode("ascii")
    baseline = 792 - (72 + 4 + 12 * 0.8)
    assert f"76.00 {baseline:.2f} Td" in content
    assert f"213.00 {baseline:.2f} Td" in content
    assert f"350.00 {baseline:.2f} Td" in content


def test_alternate_row_tint() -> None:
    doc = Document().add_page()
    table = doc.new_table_auto(2).set_alternate_row_color(rgb(240, 240, 240))
    table.add_rows([["a", 1], ["b", 2], ["c", 3], ["d", 4]]).draw()
    content = bytes(doc.current_page.content).decode("ascii")
    assert content.count("0.941 0.941 0.941 rg") == 2


def test_empty_table_draws_nothing() -> None:
    doc = Document().add_page()
    start = doc.get_pos()
    assert doc.new_table([100, 100]).draw() is doc
    assert bytes(doc.current_page.content) == b""
    assert doc.get_pos() == start

    assert doc.new_table_auto(0).row("x").draw() is doc
    assert doc.page_count == 1


def test_auto_columns_split_content_width() -> None:
    doc = Document().add_page()
    table = doc.new_table_auto(4)
    assert [column.width for column in table.columns] == [pytest.approx(117)] * 4
    assert table.width == pytest.approx(468)


def test_convenience_tables() -> None:
    doc = Document().add_page()
    doc.simple_table(["Name", "Score"], [["Ada", 10], ["Lin", 9]])
    doc.data_table({"Region": "EU", "Units": 12})
    doc.key_value_table([("Owner", "Ops")])

    runs = page_runs(doc)[0]
    assert runs[:6] == ["Name", "Score", "Ada", "10", "Lin", "9"]
    assert runs[6:12] == ["Field", "Value", "Region", "EU", "Units", "12"]
    assert runs[12:] == ["Owner:", "Ops"]


def test_table_graphics_state_does_not_leak() -> None:
    doc = small_document()
    doc.set_pos(72, 228 - 4 * (12 + 2 * 4))
    table = doc.new_table([156]).header("Item")
    table.add_rows([[f"item {number}"] for number in range(1, 11)]).draw()
    assert doc.page_count == 3

    pdf = parse_pdf(doc.to_bytes())
    for page in pdf.page_objects():
        operators = [operator for operator, _ in pdf.content_operators(page)]
        assert operators[0] == "q"
        assert operators[-1] == "Q"
        assert operators.count("q") == operators.count("Q") == 1
