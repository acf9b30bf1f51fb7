# document_utils.py

import logging
import os
from typing import NamedTuple, Optional

from .config import CONTENT_ROOT, MSG_EMPTY_REFERENCE, MSG_FILE_NOT_FOUND, MSG_OPEN_FAILURE
from .errors import EmptyReference, FileNotFound, OpenFailure

logger = logging.getLogger(__name__)

EMPTY_PATH = "empty_path"
NOT_FOUND = "not_found"

MATCH_DIRECT = "direct"
MATCH_EXACT = "exact"
MATCH_SUFFIX = "suffix"


class ResolutionResult(NamedTuple):
    """Outcome of one resolve() call: a located file or a failure reason."""
    path: Optional[str]
    reason: Optional[str]
    stored_path: Optional[str]
    filename: str
    search_folder: str
    matched_by: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.path is not None


def stored_filename(stored_path: str) -> str:
    """Bare file name of a stored path, accepting both '/' and '\\' separators."""
    return os.path.basename(stored_path.replace('\\', '/'))


def upload_suffix(filename: str) -> str:
    """
    Part of an upload name that survives a new timestamp prefix: from the first
    underscore on. A name without underscore is the original file name, which
    uploads carry as ``_{name}``.
    """
    if '_' in filename:
        return filename[filename.index('_'):]
    return '_' + filename


def search_folder_for(folder: str) -> str:
    """Upload folder of a content kind, under CONTENT_ROOT."""
    return os.path.join(CONTENT_ROOT, folder) if CONTENT_ROOT else folder


def _list_files(search_folder: str):
    # Listing order is whatever the filesystem returns
    with os.scandir(search_folder) as entries:
        return [entry for entry in entries if entry.is_file()]


def resolve(stored_path: Optional[str], search_folder: str) -> ResolutionResult:
    """
    Finds the file behind a stored PDF path.

    Tried in order, first hit wins:
      1. the stored path itself (absolute, or relative to the working directory);
      2. a file with the same name directly inside ``search_folder``;
      3. a file inside ``search_folder`` whose name contains the part of the
         stored name that starts at its first underscore. Uploads are saved as
         ``{epochMillis}_{originalName}``, so this finds the upload again when
         only the timestamp differs. A stored name without underscore is
         looked up as ``_{name}``, which also matches longer names ending the
         same way (``report.pdf`` finds ``1700000000000_final_report.pdf``).
         With several candidates the first one in directory-listing order
         wins, which is not stable across filesystems.

    A stored path without a file name (``old/location/``) is only tried as is.
    An unreadable ``search_folder`` counts as not found.
    """
    if not stored_path:
        return ResolutionResult(None, EMPTY_PATH, stored_path, "", search_folder)

    if os.path.isfile(stored_path):
        return ResolutionResult(stored_path, None, stored_path, stored_filename(stored_path),
                                search_folder, MATCH_DIRECT)

    filename = stored_filename(stored_path)
    if filename and search_folder and os.path.isdir(search_folder):
        try:
            files = _list_files(search_folder)
        except OSError as e:
            logger.warning("Cannot list '%s' while looking for '%s': %s", search_folder, filename, e)
            files = []

        for entry in files:
            if entry.name == filename:
                logger.debug("Found '%s' by name in '%s'", filename, search_folder)
                return ResolutionResult(entry.path, None, stored_path, filename,
                                        search_folder, MATCH_EXACT)

        suffix = upload_suffix(filename)
        for entry in files:
            if suffix in entry.name:
                logger.info("Stored path '%s' re-associated with '%s' by suffix '%s'",
                            stored_path, entry.path, suffix)
                return ResolutionResult(entry.path, None, stored_path, filename,
                                        search_folder, MATCH_SUFFIX)

    return ResolutionResult(None, NOT_FOUND, stored_path, filename, search_folder)


def require_document(stored_path: Optional[str], search_folder: str, noun: str) -> str:
    """
    Same as resolve() but returns the located path or raises the viewer error
    whose message tells the user what went wrong.
    """
    result = resolve(stored_path, search_folder)
    if result.ok:
        return result.path
    if result.reason == EMPTY_PATH:
        raise EmptyReference(MSG_EMPTY_REFERENCE.format(noun=noun))
    raise FileNotFound(MSG_FILE_NOT_FOUND.format(
        path=stored_path, folder=os.path.basename(os.path.normpath(search_folder)) or search_folder,
        filename=result.filename))


def open_failure(error: Exception, stored_path: Optional[str]) -> OpenFailure:
    return OpenFailure(MSG_OPEN_FAILURE.format(error=error, path=stored_path))
