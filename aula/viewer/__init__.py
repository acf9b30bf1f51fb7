from ..config import get_viewer_config
from .PDFEngine import PDFEngine
from .controller import ViewerController


def open_viewer(parent, kind, session, record=None, record_id=None, owner_id=None, navigate=None):
    """Opens the PDF viewer window for a record given as object or by id."""
    # Tk widgets are only needed once a window is actually opened
    from .view import ViewerView

    view = ViewerView(parent)
    engine = PDFEngine()
    controller = ViewerController(view, engine, get_viewer_config(kind), session, navigate)
    # Release the document when the window is closed from the title bar
    view.protocol("WM_DELETE_WINDOW", lambda: (controller.cleanup(), view.close()))
    if record is not None:
        controller.set_record(record, owner_id)
    elif record_id is not None:
        controller.set_record_by_id(record_id, owner_id)
    return controller
