"""Shared pytest fixtures for the aula test suite."""

from __future__ import annotations

import fitz
import pytest

import aula.database as database


def make_pdf(path, pages: int = 1) -> str:
    """Write a PDF with *pages* A4 pages, each labelled with its number."""
    doc = fitz.open()
    for i in range(pages):
        page = doc.new_page()
        page.insert_text((72, 72), f"Page {i + 1}")
    doc.save(str(path))
    doc.close()
    return str(path)


@pytest.fixture
def pdf_factory(tmp_path):
    def _make(relative: str, pages: int = 1) -> str:
        target = tmp_path / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        return make_pdf(target, pages)
    return _make


@pytest.fixture
def tmp_db(tmp_path, monkeypatch):
    """Temporary SQLite DB with the schema applied."""
    db_file = str(tmp_path / "test_aula.db")
    monkeypatch.setattr(database, "DB_NAME", db_file)
    database.setup_database()
    return db_file


class FakeWidget:
    def __init__(self):
        self.options = {}

    def config(self, **kwargs):
        self.options.update(kwargs)

    def click(self):
        self.options["command"]()


class FakeView:
    """Records what the controller asks the viewer window to show."""

    def __init__(self):
        self.btn_prev = FakeWidget()
        self.btn_next = FakeWidget()
        self.btn_zoom_in = FakeWidget()
        self.btn_zoom_out = FakeWidget()
        self.btn_back = FakeWidget()
        self.lbl_title = FakeWidget()
        self.lbl_page = FakeWidget()

        self.images = []
        self.error_message = None
        self.error_visible = False
        self.controls_visible = False
        self.closed = False

    def show_image(self, image):
        self.images.append(image)

    def show_error(self, message):
        self.error_message = message
        self.error_visible = True
        self.controls_visible = False

    def show_content(self):
        self.error_visible = False
        self.controls_visible = True

    def close(self):
        self.closed = True

    @property
    def page_label(self):
        return self.lbl_page.options.get("text")


@pytest.fixture
def fake_view():
    return FakeView()
