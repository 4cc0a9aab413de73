from __future__ import annotations

import io
from pathlib import Path

import pytest

from pdfbuilder import A4, LETTER, Document, Metadata, Orientation, PageSize, new_document, parse_pdf


def test_page_count_and_current_page() -> None:
    doc = Document()
    assert doc.page_count == 0
    assert doc.page_number == 0

    doc.add_page()
    assert doc.page_count == 1

    doc.add_page()
    assert doc.page_count == 2
    assert doc.page_number == 2

    doc.text("second page only")
    assert bytes(doc.pages[0].content) == b""
    assert b"second page only" in bytes(doc.pages[1].content)
    assert doc.current_page is doc.pages[1]


def test_add_page_resets_cursor_to_content_origin() -> None:
    doc = Document().set_margins(50, 40, 30, 20).add_page()
    assert doc.get_pos() == (20, 50)

    doc.set_pos(300, 400)
    assert doc.get_pos() == (300, 400)

    doc.add_page()
    assert doc.get_pos() == (20, 50)


def test_move_to_is_relative_to_content_area() -> None:
    doc = Document().add_page().move_to(10, 20)
    assert doc.get_pos() == (82, 92)


def test_content_dimensions() -> None:
    doc = Document()
    assert doc.content_width() == pytest.approx(468)
    assert doc.content_height() == pytest.approx(648)
    doc.set_margins(10, 10, 10, 10).add_page()
    assert doc.content_width() == pytest.approx(592)
    assert doc.content_bottom() == pytest.approx(782)


def test_page_setup_applies_only_to_later_pages() -> None:
    doc = Document().add_page()
    doc.set_page_size(A4).set_orientation(Orientation.LANDSCAPE).add_page()

    assert doc.pages[0].size == LETTER
    assert doc.pages[1].size == PageSize(A4.height, A4.width)
    assert doc.pages[1].orientation is Orientation.LANDSCAPE


def test_drawing_before_add_page_creates_one() -> None:
    doc = Document()
    doc.line(0, 0, 10, 10)
    assert doc.page_count == 1


def test_empty_document_serializes_one_blank_page() -> None:
    doc = Document()
    pdf = parse_pdf(doc.to_bytes())
    assert doc.page_count == 1
    assert len(pdf.page_objects()) == 1


def test_write_save_and_to_bytes_agree(tmp_path: Path) -> None:
    doc = new_document().add_page().text("Hello")

    sink = io.BytesIO()
    written = doc.write(sink)
    target = doc.save(tmp_path / "hello.pdf")

    assert written == len(sink.getvalue())
    assert target.read_bytes() == sink.getvalue() == doc.to_bytes()


def test_repeated_serialization_is_identical() -> None:
    doc = Document().add_page().text("same")
    assert doc.to_bytes() == doc.to_bytes()


def test_metadata_lands_in_info_dictionary() -> None:
    doc = Document().set_title("Quarterly").set_author("Ops").set_subject("Numbers").set_keywords("q1 q2")
    doc.add_page()
    info = parse_pdf(doc.to_bytes()).info()

    assert info["Title"] == "Quarterly"
    assert info["Author"] == "Ops"
    assert info["Subject"] == "Numbers"
    assert info["Keywords"] == "q1 q2"
    assert info["Producer"] == "pdfbuilder"
    assert info["CreationDate"].startswith("D:")
    assert "Creator" not in info


def test_set_metadata_fills_defaults() -> None:
    doc = Document().set_metadata(Metadata(title="T", producer="", creation_date=None, mod_date=None))
    assert doc.metadata.producer == "pdfbuilder"
    assert doc.metadata.creation_date is not None
    assert doc.metadata.mod_date is not None


def test_set_metadata_leaves_argument_unchanged() -> None:
    metadata = Metadata(title="T", producer="", creation_date=None, mod_date=None)
    doc = Document().set_metadata(metadata)

    assert doc.metadata is not metadata
    assert doc.metadata.title == "T"
    assert metadata.producer == ""
    assert metadata.creation_date is None
    assert metadata.mod_date is None
