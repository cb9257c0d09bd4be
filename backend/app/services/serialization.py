"""
Task Board Backend — Document Serialization
=============================================

What:  Turns stored documents into JSON-safe dicts.
How:   FastAPI's jsonable_encoder with an ObjectId → str encoder; datetimes
       become ISO-8601 strings. Keys are left untouched, so `_id` stays `_id`.
"""

from typing import Any, Dict

from bson import ObjectId
from fastapi.encoders import jsonable_encoder


def serialize_document(doc: Dict[str, Any]) -> Dict[str, Any]:
    return jsonable_encoder(doc, custom_encoder={ObjectId: str})
