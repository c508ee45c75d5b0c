# blog_api/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # App-level errors (AppError, DatabaseError, NotFoundError, InvalidFieldError)
# │   ├── integrity_classifier.py    # SQL-level constraint classification
# │   └── mapper.py                  # Map SQL-level / driver errors to app-level errors

from .base import AppError, DatabaseError, ErrorKind, InvalidFieldError, NotFoundError
from .mapper import map_storage_error, storage_errors

__all__ = [
    "AppError",
    "DatabaseError",
    "ErrorKind",
    "InvalidFieldError",
    "NotFoundError",
    "map_storage_error",
    "storage_errors",
]
