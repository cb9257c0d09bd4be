"""
Task Board Backend — Task Document
====================================

What:  Shape of documents in the `tasks` collection.

Document:
    {
        "_id":         ObjectId,
        "title":       str,                 # trimmed, non-empty
        "category":    str,
        "description": str,                 # trimmed, non-empty
        "deadline":    datetime (UTC),
        "budget":      int | float,
        "status":      "open",              # never changed by the API
        "bidsCount":   int,                 # $inc by POST /tasks/{id}/bid
        "author":      {"email": str (lower-cased), "name": str},
        "createdAt":   datetime,
        "updatedAt":   datetime,
    }

Lifecycle:
    1. Inserted by POST /tasks (status='open', bidsCount=0)
    2. Editable fields replaced by PATCH /tasks/{id} (author only)
    3. bidsCount incremented by POST /tasks/{id}/bid
    4. Removed by DELETE /tasks/{id} (author only)
"""

from datetime import datetime
from typing import Any, Dict

DEFAULT_STATUS = "open"

# Fields a PATCH replaces; everything else is immutable through the API
EDITABLE_FIELDS = ("title", "category", "description", "deadline", "budget")


def build_task(fields: Dict[str, Any], author_email: str, author_name: str, now: datetime) -> Dict[str, Any]:
    """
    Assemble a new task document from already-validated fields.

    Args:
        fields: Output of validation.validate_task_fields (editable fields only)
        author_email: Creator email, lower-cased by the caller
        author_name: Creator display name ("" when absent)
        now: Timestamp used for both createdAt and updatedAt
    """
    return {
        **{key: fields[key] for key in EDITABLE_FIELDS},
        "status": DEFAULT_STATUS,
        "bidsCount": 0,
        "author": {"email": author_email, "name": author_name},
        "createdAt": now,
        "updatedAt": now,
    }


def build_update(fields: Dict[str, Any], now: datetime) -> Dict[str, Any]:
    """$set document for a full replace of the editable fields."""
    return {"$set": {**{key: fields[key] for key in EDITABLE_FIELDS}, "updatedAt": now}}
