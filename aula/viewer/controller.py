import logging
from typing import Callable, Optional

from .. import database
from ..config import MSG_EMPTY_REFERENCE, MSG_RECORD_NOT_FOUND, get_viewer_config
from ..document_utils import require_document, search_folder_for
from ..errors import EmptyReference, RecordNotFound, RenderFailure, ViewerError
from ..models import ContentRecord, StoredDocumentRef
from ..navigation import BackRoute, back_label, resolve_back_route
from ..session import Session

logger = logging.getLogger(__name__)

# Viewer states
EMPTY = "empty"
LOADING = "loading"
DISPLAYING = "displaying"
FAILED = "failed"


class ViewerController:
    def __init__(self, view, engine, viewer_config: dict, session: Session,
                 navigate: Optional[Callable[[BackRoute, str], None]] = None,
                 lookup_user=None):
        """
        Drives the PDF viewer for one kind of content.

        :param view: ViewerView (or anything with the same widgets and methods)
        :param engine: PDFEngine holding the open document
        :param viewer_config: entry of config.CONTENT_KINDS, with its 'kind'
        :param session: the logged-in user
        :param navigate: called with (BackRoute, kind) when the user goes back
        :param lookup_user: finds a teacher by id, database.get_user_by_id by default
        """
        self.view = view
        self.engine = engine
        self.config = viewer_config
        self.session = session
        self.navigate = navigate
        self.lookup_user = lookup_user or database.get_user_by_id

        self.state = EMPTY
        self.error_message = None
        self.current_record: Optional[ContentRecord] = None
        self.owner_id = -1

        self.view.btn_prev.config(command=self.show_previous_page)
        self.view.btn_next.config(command=self.show_next_page)
        self.view.btn_zoom_in.config(command=self.zoom_in)
        self.view.btn_zoom_out.config(command=self.zoom_out)
        self.view.btn_back.config(command=self.return_to_list)

    # --- Record selection ---

    def set_record(self, record: ContentRecord, owner_id: Optional[int] = None):
        """Shows a record. ``owner_id`` overrides the record's owner for navigation."""
        self.current_record = record
        self.view.lbl_title.config(text=record.title)

        if owner_id is not None:
            self.owner_id = owner_id
        elif record.owner_id > 0:
            self.owner_id = record.owner_id

        self.view.btn_back.config(text=back_label(self.session, self.owner_id, self.config["plural"]))
        self.load_reference(record.document_ref())

    def set_record_by_id(self, record_id: int, owner_id: Optional[int] = None):
        record = database.get_record(self.config["kind"], record_id)
        if record is None:
            self.cleanup()
            self._fail(RecordNotFound(MSG_RECORD_NOT_FOUND.format(label=self.config["label"])))
            return
        self.set_record(record, owner_id)

    # --- Loading ---

    def load_document(self, stored_path: Optional[str]):
        """Resolves, opens and shows the first page of a stored PDF path."""
        self.load_reference(StoredDocumentRef(stored_path, self.owner_id, self.config["kind"]))

    def load_reference(self, ref: StoredDocumentRef):
        """
        Opens the PDF a record points at. The folder searched when the stored
        path is stale is the upload folder of the reference's kind.
        """
        self.cleanup()
        self.state = LOADING
        try:
            if ref.is_empty:
                raise EmptyReference(MSG_EMPTY_REFERENCE.format(noun=self.config["noun"]))
            folder = search_folder_for(get_viewer_config(ref.logical_folder)["folder"])
            path = require_document(ref.path, folder, self.config["noun"])
            self.engine.load_document(path, ref.path)
            self.update_page_label()
            self.view.show_image(self.engine.get_page_image())
        except ViewerError as e:
            # The initial frame failed too: nothing useful stays open
            self.cleanup()
            self._fail(e)
            return

        self.state = DISPLAYING
        self.error_message = None
        self.view.show_content()

    def cleanup(self):
        """Releases the open document. Call before leaving the viewer."""
        self.engine.close()

    # --- Page and zoom actions ---

    def show_previous_page(self):
        if self.state == DISPLAYING and self.engine.prev_page():
            self.render_current_page()
            self.update_page_label()

    def show_next_page(self):
        if self.state == DISPLAYING and self.engine.next_page():
            self.render_current_page()
            self.update_page_label()

    def zoom_in(self):
        if self.state == DISPLAYING and self.engine.zoom_in():
            self.render_current_page()

    def zoom_out(self):
        if self.state == DISPLAYING and self.engine.zoom_out():
            self.render_current_page()

    def render_current_page(self):
        if not self.engine.is_open:
            return
        try:
            self.view.show_image(self.engine.get_page_image())
        except RenderFailure as e:
            # The last good frame stays on screen
            self._fail(e)

    def update_page_label(self):
        self.view.lbl_page.config(text=self.engine.page_label)

    # --- Error reporting ---

    def _fail(self, error: ViewerError):
        logger.warning("%s: %s", type(error).__name__, error.message)
        self.show_error(error.message)

    def show_error(self, message: str):
        """Switches the view to the error state: message shown, controls hidden."""
        self.state = FAILED
        self.error_message = message
        self.view.show_error(message)

    # --- Navigation ---

    def return_to_list(self):
        self.cleanup()
        route = resolve_back_route(self.session, self.owner_id, self.config["plural"],
                                   self.lookup_user)
        if self.navigate is None:
            self.view.close()
            return
        try:
            self.navigate(route, self.config["kind"])
        except Exception:
            logger.exception("Failed to return to the %s view", self.config["kind"])
            return
        self.view.close()
