from typing import Dict

# --- General settings ---

# SQLite database file holding users, courses, exercises and practical works
DB_NAME: str = 'aula.db'

# Base directory of the upload folders. Empty string means the process
# working directory, which is where uploads have always been written.
CONTENT_ROOT: str = ''

# --- Viewer window ---

APP_TITLE: str = "Aula - Learning Assistant"
APP_GEOMETRY: str = "1100x750"
VIEWER_GEOMETRY: str = "1000x850"

# --- Zoom ---

ZOOM_DEFAULT: float = 1.0
ZOOM_STEP: float = 0.25
ZOOM_MIN: float = 0.5

# --- Content kinds ---
# {kind: viewer configuration}
# folder: upload folder searched when the stored path does not resolve
# owner_field: column of the content table holding the owning teacher
CONTENT_KINDS: Dict[str, Dict[str, str]] = {
    "courses": {
        "folder": "courses",
        "table": "course",
        "owner_field": "teacher_id",
        "noun": "course",
        "label": "Course",
        "plural": "Courses",
    },
    "exercises": {
        "folder": "exercises",
        "table": "exercise",
        "owner_field": "teacher_id",
        "noun": "exercise",
        "label": "Exercise",
        "plural": "Exercises",
    },
    "practical_works": {
        "folder": "practical_works",
        "table": "practical_work",
        "owner_field": "teacher_id",
        "noun": "practical work",
        "label": "Practical work",
        "plural": "Practical Works",
    },
}

# --- User-facing messages ---

MSG_EMPTY_REFERENCE: str = "No PDF available for this {noun}."
MSG_FILE_NOT_FOUND: str = (
    "PDF file not found: {path}\n\n"
    "Please ensure the PDF file exists and check the path in the database.\n"
    "Try placing the PDF in the '{folder}' folder with name: {filename}"
)
MSG_OPEN_FAILURE: str = "Failed to load PDF: {error}\n\nPath: {path}"
MSG_RENDER_FAILURE: str = "Failed to render page: {error}"
MSG_RECORD_NOT_FOUND: str = "{label} not found."
PAGE_LABEL: str = "Page {current} of {total}"


def get_viewer_config(kind: str) -> Dict[str, str]:
    """Returns the viewer configuration of a content kind, with its kind name."""
    try:
        conf = CONTENT_KINDS[kind]
    except KeyError:
        raise ValueError(f"Unknown content kind: {kind!r}")
    return dict(conf, kind=kind)
