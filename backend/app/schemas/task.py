"""
Task Board Backend — Task Request/Response Schemas
====================================================

What:  API contract for the /tasks endpoints.

Request models accept `Any` for every field: budget may arrive as a number
or a numeric string and deadline as a date string or epoch milliseconds.
Coercion and the ordered field checks live in services/validation.py.

Task documents themselves are returned as plain JSON objects (see
services/serialization.py) because GET /tasks/{id} passes the stored
document through unmodified.
"""

from typing import Any, Optional

from pydantic import Field

from app.schemas.user import CamelModel


class TaskFields(CamelModel):
    """Editable task fields shared by create and update."""
    title: Any = None
    category: Any = None
    description: Any = None
    deadline: Any = None
    budget: Any = None


class TaskCreateRequest(TaskFields):
    """Body of POST /tasks."""
    user_email: Optional[Any] = None
    user_name: Optional[Any] = None


class TaskUpdateRequest(TaskFields):
    """Body of PATCH /tasks/{id}."""


class TaskMutationResponse(CamelModel):
    """Returned by create, update and delete."""
    ok: bool = True
    id: str = Field(description="Task identifier (24-char hex ObjectId)")


class BidResponse(CamelModel):
    ok: bool = True
    bids_count: int = Field(description="bidsCount after the increment")
