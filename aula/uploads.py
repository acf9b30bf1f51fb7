# uploads.py

import logging
import os
import shutil
import time
from typing import Optional

import PyPDF2

from .config import CONTENT_ROOT, get_viewer_config
from .errors import UploadError

logger = logging.getLogger(__name__)


def count_pdf_pages(file_path: str) -> int:
    """Number of pages of a PDF. Raises UploadError if it cannot be read."""
    try:
        with open(file_path, 'rb') as infile:
            reader = PyPDF2.PdfReader(infile)
            return len(reader.pages)
    except FileNotFoundError as e:
        raise UploadError(f"File not found: {file_path}") from e
    except Exception as e:
        raise UploadError(f"'{os.path.basename(file_path)}' is not a readable PDF: {e}") from e


def upload_name(original_name: str, now_ms: Optional[int] = None) -> str:
    """``{epochMillis}_{originalName}``, the name every upload is stored under."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{now_ms}_{os.path.basename(original_name)}"


def store_upload(source_path: str, kind: str, base_dir: Optional[str] = None,
                 now_ms: Optional[int] = None) -> str:
    """
    Copies a PDF into the upload folder of ``kind``.

    Returns the path to save in the database, relative to ``base_dir``
    (CONTENT_ROOT by default), e.g. ``exercises/1700000000000_report.pdf``.
    """
    folder = get_viewer_config(kind)["folder"]
    if base_dir is None:
        base_dir = CONTENT_ROOT

    pages = count_pdf_pages(source_path)
    if pages < 1:
        raise UploadError(f"'{os.path.basename(source_path)}' has no pages.")

    target_dir = os.path.join(base_dir, folder) if base_dir else folder
    stored_name = upload_name(source_path, now_ms)
    try:
        os.makedirs(target_dir, exist_ok=True)
        shutil.copyfile(source_path, os.path.join(target_dir, stored_name))
    except OSError as e:
        raise UploadError(f"Could not save the {get_viewer_config(kind)['noun']} PDF file: {e}") from e

    logger.info("Stored %s (%d pages) as %s/%s", source_path, pages, folder, stored_name)
    return f"{folder}/{stored_name}"
