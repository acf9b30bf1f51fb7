# models.py

from typing import Any, Dict, Optional

from .config import CONTENT_KINDS

TEACHER = "teacher"
STUDENT = "student"


class User:
    def __init__(self, user_id: int, name: str, role: str):
        self.id = user_id
        self.name = name
        self.role = role

    @property
    def is_teacher(self) -> bool:
        return self.role == TEACHER

    def __repr__(self):
        return f"User(id={self.id}, name={self.name!r}, role={self.role!r})"


class StoredDocumentRef:
    """
    Persisted pointer to the PDF of a course, exercise or practical work.

    ``path`` is whatever was saved in the database when the file was attached,
    so it may be absolute, relative, stale or empty.
    """

    def __init__(self, path: Optional[str], owner_id: int, logical_folder: str):
        if logical_folder not in CONTENT_KINDS:
            raise ValueError(f"Unknown content folder: {logical_folder!r}")
        self.path = path
        self.owner_id = owner_id
        self.logical_folder = logical_folder

    @property
    def is_empty(self) -> bool:
        return not self.path

    def __repr__(self):
        return (f"StoredDocumentRef(path={self.path!r}, owner_id={self.owner_id}, "
                f"logical_folder={self.logical_folder!r})")


class ContentRecord:
    """One course, exercise or practical work as read from the database."""

    def __init__(self, record_id: int, kind: str, title: str,
                 pdf_path: Optional[str] = None, owner_id: int = 0,
                 description: str = "", course_id: Optional[int] = None,
                 deadline: Optional[str] = None):
        self.id = record_id
        self.kind = kind
        self.title = title
        self.pdf_path = pdf_path
        self.owner_id = owner_id or 0
        self.description = description or ""
        self.course_id = course_id
        self.deadline = deadline

    @classmethod
    def from_row(cls, kind: str, row: Dict[str, Any]) -> "ContentRecord":
        owner_field = CONTENT_KINDS[kind]["owner_field"]
        return cls(
            record_id=row["id"],
            kind=kind,
            title=row["title"],
            pdf_path=row.get("pdf_path"),
            owner_id=row.get(owner_field) or 0,
            description=row.get("description") or "",
            course_id=row.get("course_id"),
            deadline=row.get("deadline"),
        )

    def document_ref(self) -> StoredDocumentRef:
        return StoredDocumentRef(self.pdf_path, self.owner_id, self.kind)

    def __repr__(self):
        return f"ContentRecord(id={self.id}, kind={self.kind!r}, title={self.title!r})"
