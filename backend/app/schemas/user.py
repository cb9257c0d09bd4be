"""
Task Board Backend — User Request/Response Schemas
====================================================

What:  API contract for POST /users and GET /users/{email}.
How:   Wire names are camelCase (authProvider, createdAt); Python attributes
       are snake_case through pydantic's to_camel alias generator.

Request fields are deliberately loose (Optional, no format checks): the
service decides what "missing" means so the 400 body carries its own
messages instead of FastAPI's 422 payload.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserUpsertRequest(CamelModel):
    """Body of POST /users. Absent or null optional fields take defaults."""
    name: Optional[str] = None
    email: Optional[str] = None
    photo: Optional[str] = None
    bio: Optional[str] = None
    auth_provider: Optional[str] = None


class UserUpsertResponse(CamelModel):
    ok: bool = True
    created: bool = Field(description="True when a new user document was inserted")
    email: str


class UserProfile(CamelModel):
    """
    Public projection of a stored user (GET /users/{email}).

    Every field is optional: documents written before a field existed
    are returned as-is rather than rejected.
    """
    name: Optional[str] = None
    email: Optional[str] = None
    photo: Optional[str] = None
    bio: Optional[str] = None
    auth_provider: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
