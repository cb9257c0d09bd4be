"""
Task Board Backend — User Document
====================================

What:  Shape of documents in the `users` collection.

Document:
    {
        "email":        "ada@example.com",   # unique index, stored lower-cased
        "name":         "",
        "photo":        "",
        "bio":          "",
        "authProvider": "password",
        "createdAt":    datetime,            # $setOnInsert only
        "updatedAt":    datetime,            # every write
    }
"""

from datetime import datetime
from typing import Any, Dict

DEFAULT_AUTH_PROVIDER = "password"

# Fields returned by GET /users/{email}; _id is never exposed
PUBLIC_FIELDS = ("name", "email", "photo", "bio", "authProvider", "createdAt", "updatedAt")

PUBLIC_PROJECTION: Dict[str, int] = {"_id": 0, **{field: 1 for field in PUBLIC_FIELDS}}


def build_upsert(
    name: str,
    photo: str,
    bio: str,
    auth_provider: str,
    now: datetime,
) -> Dict[str, Any]:
    """Update document for the upsert-by-email write."""
    return {
        "$set": {
            "name": name,
            "photo": photo,
            "bio": bio,
            "authProvider": auth_provider,
            "updatedAt": now,
        },
        "$setOnInsert": {"createdAt": now},
    }
