import logging
import sqlite3
from datetime import datetime
from typing import Any, Dict, List, Optional

from .config import CONTENT_KINDS, DB_NAME
from .models import ContentRecord, User

logger = logging.getLogger(__name__)

# Columns accepted by insert_record, per content table
_RECORD_COLUMNS: Dict[str, List[str]] = {
    "course": ["title", "description", "comment", "pdf_path", "teacher_id", "target_level"],
    "exercise": ["course_id", "title", "description", "comment", "pdf_path", "teacher_id", "target_level"],
    "practical_work": ["course_id", "title", "description", "comment", "deadline", "pdf_path", "teacher_id", "target_level"],
}


def get_db_connection() -> sqlite3.Connection:
    conn = sqlite3.connect(DB_NAME)
    conn.row_factory = sqlite3.Row
    return conn


def _table_for(kind: str) -> str:
    try:
        return CONTENT_KINDS[kind]["table"]
    except KeyError:
        raise ValueError(f"Unknown content kind: {kind!r}")


_SCHEMA = """
    CREATE TABLE IF NOT EXISTS user (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        role TEXT NOT NULL DEFAULT 'student'
    );
    CREATE TABLE IF NOT EXISTS course (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        description TEXT,
        comment TEXT,
        pdf_path TEXT,
        teacher_id INTEGER,
        target_level TEXT,
        created_at TEXT
    );
    CREATE TABLE IF NOT EXISTS exercise (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        course_id INTEGER,
        title TEXT NOT NULL,
        description TEXT,
        comment TEXT,
        pdf_path TEXT,
        teacher_id INTEGER,
        target_level TEXT,
        created_at TEXT
    );
    CREATE TABLE IF NOT EXISTS practical_work (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        course_id INTEGER,
        title TEXT NOT NULL,
        description TEXT,
        comment TEXT,
        deadline TEXT,
        pdf_path TEXT,
        teacher_id INTEGER,
        target_level TEXT,
        created_at TEXT
    );
"""


def setup_database():
    """Creates the user and content tables if they do not exist yet."""
    conn = get_db_connection()
    try:
        conn.executescript(_SCHEMA)
        conn.commit()
    finally:
        conn.close()


# --- Users ---

def insert_user(name: str, role: str) -> int:
    conn = get_db_connection()
    try:
        cursor = conn.execute("INSERT INTO user (name, role) VALUES (?, ?)", (name, role))
        conn.commit()
        return cursor.lastrowid
    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()


def get_user_by_id(user_id: int) -> Optional[User]:
    conn = get_db_connection()
    try:
        row = conn.execute("SELECT id, name, role FROM user WHERE id = ?", (user_id,)).fetchone()
    except sqlite3.Error as e:
        logger.warning("Database error reading user %s: %s", user_id, e)
        return None
    finally:
        conn.close()
    if row is None:
        return None
    return User(row["id"], row["name"], row["role"])


# --- Courses, exercises and practical works ---

def insert_record(kind: str, title: str, **fields: Any) -> int:
    """
    Inserts a course, exercise or practical work and returns its id.

    Unknown field names raise ValueError instead of reaching the SQL.
    """
    table = _table_for(kind)
    allowed = _RECORD_COLUMNS[table]
    unknown = set(fields) - set(allowed)
    if unknown:
        raise ValueError(f"Unknown fields for {kind}: {sorted(unknown)}")

    columns = ["title"] + list(fields) + ["created_at"]
    values = [title] + list(fields.values()) + [datetime.now().isoformat()]
    placeholders = ", ".join("?" for _ in columns)
    sql = f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})"

    conn = get_db_connection()
    try:
        cursor = conn.execute(sql, values)
        conn.commit()
        return cursor.lastrowid
    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()


def get_record(kind: str, record_id: int) -> Optional[ContentRecord]:
    """Returns the record with that id, or None if it does not exist."""
    table = _table_for(kind)
    conn = get_db_connection()
    try:
        row = conn.execute(f"SELECT * FROM {table} WHERE id = ?", (record_id,)).fetchone()
    except sqlite3.Error as e:
        logger.warning("Database error reading %s %s: %s", kind, record_id, e)
        return None
    finally:
        conn.close()
    if row is None:
        return None
    return ContentRecord.from_row(kind, dict(row))


def list_records(kind: str, teacher_id: Optional[int] = None) -> List[ContentRecord]:
    table = _table_for(kind)
    owner_field = CONTENT_KINDS[kind]["owner_field"]
    sql = f"SELECT * FROM {table}"
    params: tuple = ()
    if teacher_id is not None:
        sql += f" WHERE {owner_field} = ?"
        params = (teacher_id,)
    sql += " ORDER BY title COLLATE NOCASE ASC"

    conn = get_db_connection()
    try:
        rows = conn.execute(sql, params).fetchall()
    except sqlite3.Error as e:
        logger.warning("Database error listing %s: %s", kind, e)
        return []
    finally:
        conn.close()
    return [ContentRecord.from_row(kind, dict(row)) for row in rows]


def update_pdf_path(kind: str, record_id: int, pdf_path: Optional[str]) -> int:
    """Points a record at another PDF. Returns the number of updated rows."""
    table = _table_for(kind)
    # Stored paths always use forward slashes
    normalized = pdf_path.replace('\\', '/') if pdf_path else pdf_path
    conn = get_db_connection()
    try:
        cursor = conn.execute(f"UPDATE {table} SET pdf_path = ? WHERE id = ?", (normalized, record_id))
        conn.commit()
        return cursor.rowcount
    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()
