from __future__ import annotations

from datetime import datetime, timedelta, timezone

from pdfbuilder import Document, parse_pdf
from pdfbuilder.pdf_writer import build_object_graph, pdf_date
from pdfbuilder.primitives import PDFReference
from pdfbuilder.reader import XrefEntry


def one_line_document() -> Document:
    return Document().add_page().text("Hello, world")


def is_type(obj, name: str) -> bool:
    kind = obj.value.get("Type") if isinstance(obj.value, dict) else None
    return kind is not None and kind.value == name


def collect_references(value) -> list:
    if isinstance(value, PDFReference):
        return [value]
    if isinstance(value, dict):
        return [ref for item in value.values() for ref in collect_references(item)]
    if isinstance(value, list):
        return [ref for item in value for ref in collect_references(item)]
    return []


def test_header_and_eof_markers() -> None:
    data = one_line_document().to_bytes()
    assert data.startswith(b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n")
    assert data.endswith(b"%%EOF\n")


def test_single_line_document_structure() -> None:
    data = one_line_document().to_bytes()
    pdf = parse_pdf(data)

    pages = [obj for obj in pdf.objects.values() if is_type(obj, "Page")]
    streams = [obj for obj in pdf.objects.values() if obj.is_stream]
    assert len(pages) == 1
    assert len(streams) == 1
    assert pdf.text_runs(pages[0]) == ["Hello, world"]
    assert pdf.page_tree().value["Count"] == 1


def test_xref_has_one_entry_per_object_plus_free_head() -> None:
    doc = one_line_document()
    data = doc.to_bytes()
    pdf = parse_pdf(data)
    object_count = len(build_object_graph(doc).objects)

    assert len(pdf.xref) == object_count + 1
    assert pdf.xref[0] == XrefEntry(0, 65535, "f")
    assert f"xref\n0 {object_count + 1}\n0000000000 65535 f \n".encode("ascii") in data
    assert pdf.trailer["Size"] == object_count + 1


def test_every_reference_resolves_to_its_xref_offset() -> None:
    doc = Document().add_page().text("one")
    doc.add_page().set_font("Times-Roman", 10).text("two").circle(100, 100, 20)
    data = doc.to_bytes()
    pdf = parse_pdf(data)

    refs = collect_references(pdf.trailer)
    for obj in pdf.objects.values():
        refs.extend(collect_references(obj.value))
    assert refs
    for ref in refs:
        assert ref.number in pdf.objects
        offset = pdf.xref[ref.number].offset
        assert data[offset:].startswith(f"{ref.number} 0 obj".encode("ascii"))

    for page in pdf.page_objects():
        assert pdf.resolve(page.value["Parent"]) is pdf.page_tree()


def test_stream_length_matches_content() -> None:
    doc = one_line_document()
    pdf = parse_pdf(doc.to_bytes())
    content = pdf.resolve(pdf.page_objects()[0].value["Contents"])
    assert content.value["Length"] == len(content.stream) == len(doc.pages[0].content)


def test_object_order_and_numbering() -> None:
    doc = Document().add_page().text("a")
    doc.add_page().text("b")
    graph = build_object_graph(doc)

    assert [obj.number for obj in graph.objects] == list(range(1, len(graph.objects) + 1))
    assert graph.fonts["Helvetica"].number == 1
    assert [obj.number for obj in graph.contents] == [2, 4]
    assert [obj.number for obj in graph.pages] == [3, 5]
    assert graph.page_tree.number == 6
    assert graph.catalog.number == 7
    assert graph.info.number == 8
    assert graph.trailer()["Root"] == PDFReference(7)


def test_numbering_restarts_for_every_document() -> None:
    first = build_object_graph(one_line_document())
    second = build_object_graph(one_line_document())
    assert first.objects[0].number == second.objects[0].number == 1
    assert first.catalog.number == second.catalog.number


def test_only_referenced_fonts_are_emitted() -> None:
    doc = Document().add_page().text("sans").set_font("Courier-Bold", 9).text("mono")
    pdf = parse_pdf(doc.to_bytes())

    fonts = pdf.page_objects()[0].value["Resources"]["Font"]
    assert sorted(fonts) == ["Courier-Bold", "Helvetica"]
    base_fonts = sorted(pdf.resolve(ref).value["BaseFont"].value for ref in fonts.values())
    assert base_fonts == ["Courier-Bold", "Helvetica"]
    assert pdf.resolve(fonts["Helvetica"]).value["Encoding"].value == "WinAnsiEncoding"


def test_symbol_font_keeps_builtin_encoding() -> None:
    doc = Document().add_page().set_font("ZapfDingbats", 12).text("4")
    pdf = parse_pdf(doc.to_bytes())
    font = pdf.resolve(pdf.page_objects()[0].value["Resources"]["Font"]["ZapfDingbats"])
    assert "Encoding" not in font.value


def test_pdf_date_formats() -> None:
    assert pdf_date(datetime(2024, 1, 2, 3, 4, 5)) == "D:20240102030405"
    assert pdf_date(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)) == "D:20240102030405Z"
    minus = timezone(-timedelta(hours=5, minutes=30))
    assert pdf_date(datetime(2024, 1, 2, 3, 4, 5, tzinfo=minus)) == "D:20240102030405-05'30'"
