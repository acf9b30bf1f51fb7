import io
import logging
import os

import fitz  # PyMuPDF
from PIL import Image

from ..config import MSG_RENDER_FAILURE, PAGE_LABEL, ZOOM_DEFAULT, ZOOM_MIN, ZOOM_STEP
from ..document_utils import open_failure
from ..errors import RenderFailure

logger = logging.getLogger(__name__)


class Paginator:
    """0-based current page over a document of ``total_pages`` pages."""

    def __init__(self):
        self.current_page = 0
        self.total_pages = 0

    def reset(self, total_pages: int = 0):
        self.current_page = 0
        self.total_pages = total_pages

    def previous(self) -> bool:
        if self.current_page <= 0:
            return False
        self.current_page -= 1
        return True

    def next(self) -> bool:
        if self.current_page >= self.total_pages - 1:
            return False
        self.current_page += 1
        return True

    @property
    def label(self) -> str:
        return PAGE_LABEL.format(current=self.current_page + 1, total=self.total_pages)


class ZoomController:
    """Zoom multiplier, unbounded above and never below ZOOM_MIN."""

    def __init__(self):
        self.factor = ZOOM_DEFAULT

    def reset(self):
        self.factor = ZOOM_DEFAULT

    def zoom_in(self) -> bool:
        self.factor += ZOOM_STEP
        return True

    def zoom_out(self) -> bool:
        if self.factor <= ZOOM_MIN:
            return False
        # Clamp: repeated float steps may land just above the floor
        self.factor = max(ZOOM_MIN, self.factor - ZOOM_STEP)
        return True


class PDFEngine:
    """
    Live state of one open document: the PyMuPDF handle, the page cursor and
    the zoom level. Only one document is open at a time; opening another one
    closes the previous handle first.
    """

    def __init__(self):
        self.pdf_doc = None
        self.path = None
        self.paginator = Paginator()
        self.zoom = ZoomController()

    # --- Document lifecycle ---

    @property
    def is_open(self) -> bool:
        return self.pdf_doc is not None

    @property
    def page_count(self) -> int:
        return self.pdf_doc.page_count if self.pdf_doc is not None else 0

    def load_document(self, path: str, stored_path: str = None) -> int:
        """
        Opens ``path`` and resets page and zoom. Returns the page count.

        Raises OpenFailure when the file cannot be decoded or has no pages;
        the handle is released in that case. ``stored_path`` is the path as
        recorded in the database, used in the error message.
        """
        self.close()
        stored_path = stored_path or path
        doc = None
        try:
            doc = fitz.open(path, filetype="pdf")
            if doc.page_count < 1:
                raise ValueError("document has no pages")
        except Exception as e:
            if doc is not None:
                doc.close()
            logger.exception("Could not open '%s'", path)
            raise open_failure(e, stored_path) from e

        logger.info("Loading PDF from: %s", os.path.abspath(path))
        self.pdf_doc = doc
        self.path = path
        self.paginator.reset(doc.page_count)
        self.zoom.reset()
        return doc.page_count

    def close(self):
        if self.pdf_doc is not None:
            try:
                self.pdf_doc.close()
            except Exception:
                logger.exception("Error closing '%s'", self.path)
            finally:
                self.pdf_doc = None
                self.path = None
        self.paginator.reset()
        self.zoom.reset()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # --- Rendering ---

    def render(self, page_index: int, zoom: float) -> Image.Image:
        """Rasterises one page at ``zoom`` and returns it as a PIL image."""
        if self.pdf_doc is None:
            raise RenderFailure(MSG_RENDER_FAILURE.format(error="no document is open"))
        if not 0 <= page_index < self.pdf_doc.page_count:
            raise RenderFailure(MSG_RENDER_FAILURE.format(
                error=f"page {page_index + 1} does not exist"))
        try:
            page = self.pdf_doc.load_page(page_index)
            matrix = fitz.Matrix(zoom, zoom)
            pix = page.get_pixmap(matrix=matrix, alpha=False)
            img_data = pix.tobytes("ppm")
            return Image.open(io.BytesIO(img_data))
        except Exception as e:
            logger.exception("Could not render page %s of '%s'", page_index + 1, self.path)
            raise RenderFailure(MSG_RENDER_FAILURE.format(error=e)) from e

    def get_page_image(self) -> Image.Image:
        """Current page at the current zoom."""
        return self.render(self.paginator.current_page, self.zoom.factor)

    # --- Navigation ---

    def next_page(self) -> bool:
        return self.pdf_doc is not None and self.paginator.next()

    def prev_page(self) -> bool:
        return self.pdf_doc is not None and self.paginator.previous()

    def zoom_in(self) -> bool:
        return self.pdf_doc is not None and self.zoom.zoom_in()

    def zoom_out(self) -> bool:
        return self.pdf_doc is not None and self.zoom.zoom_out()

    @property
    def page_label(self) -> str:
        return self.paginator.label
