"""
Task Board Backend — Task Route Handlers
==========================================

What:  CRUD and bid endpoints for the `tasks` collection.

Route Inventory:
    POST   /tasks                 create (201 {ok, id})
    GET    /tasks?email&category  newest first, capped list
    GET    /tasks/{id}            full document
    PATCH  /tasks/{id}?email=     author-only field replace
    DELETE /tasks/{id}?email=     author-only removal
    POST   /tasks/{id}/bid        atomic bidsCount increment

The `email` query parameter on PATCH/DELETE is a plain equality check
against the stored author email, not authentication.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import get_task_service
from app.schemas.common import ErrorResponse
from app.schemas.task import (
    BidResponse,
    TaskCreateRequest,
    TaskMutationResponse,
    TaskUpdateRequest,
)
from app.services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["Tasks"])

_ERRORS = {
    400: {"description": "Invalid input", "model": ErrorResponse},
    403: {"description": "Caller is not the task author", "model": ErrorResponse},
    404: {"description": "Task not found", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.post(
    "",
    response_model=TaskMutationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: _ERRORS[400], 500: _ERRORS[500]},
    summary="Create a task",
)
async def create_task(
    payload: TaskCreateRequest,
    service: TaskService = Depends(get_task_service),
) -> TaskMutationResponse:
    task_id = await service.create_task(payload)
    return TaskMutationResponse(ok=True, id=task_id)


@router.get(
    "",
    responses={500: _ERRORS[500]},
    summary="List tasks, newest first",
)
async def list_tasks(
    email: str | None = Query(default=None, description="Author email (case-insensitive)"),
    category: str | None = Query(default=None, description="Exact category match"),
    service: TaskService = Depends(get_task_service),
) -> List[Dict[str, Any]]:
    """At most TASK_LIST_LIMIT items (default 100); there is no next page."""
    return await service.list_tasks(email=email, category=category)


@router.get(
    "/{task_id}",
    responses={400: _ERRORS[400], 404: _ERRORS[404], 500: _ERRORS[500]},
    summary="Get a single task",
)
async def get_task(
    task_id: str,
    service: TaskService = Depends(get_task_service),
) -> Dict[str, Any]:
    return await service.get_task(task_id)


@router.patch(
    "/{task_id}",
    response_model=TaskMutationResponse,
    responses=_ERRORS,
    summary="Replace a task's editable fields (author only)",
)
async def update_task(
    task_id: str,
    payload: TaskUpdateRequest,
    email: str | None = Query(default=None, description="Author email"),
    service: TaskService = Depends(get_task_service),
) -> TaskMutationResponse:
    await service.update_task(task_id, email, payload)
    return TaskMutationResponse(ok=True, id=task_id)


@router.delete(
    "/{task_id}",
    response_model=TaskMutationResponse,
    responses=_ERRORS,
    summary="Delete a task (author only)",
)
async def delete_task(
    task_id: str,
    email: str | None = Query(default=None, description="Author email"),
    service: TaskService = Depends(get_task_service),
) -> TaskMutationResponse:
    await service.delete_task(task_id, email)
    return TaskMutationResponse(ok=True, id=task_id)


@router.post(
    "/{task_id}/bid",
    response_model=BidResponse,
    responses={400: _ERRORS[400], 404: _ERRORS[404], 500: _ERRORS[500]},
    summary="Place a bid on a task",
)
async def place_bid(
    task_id: str,
    service: TaskService = Depends(get_task_service),
) -> BidResponse:
    bids_count = await service.place_bid(task_id)
    return BidResponse(ok=True, bids_count=bids_count)
