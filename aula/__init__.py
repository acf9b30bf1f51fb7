"""Course material viewer: courses, exercises and practical works as PDFs."""

__version__ = "1.0.0"
