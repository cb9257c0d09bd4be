"""
Task Board Backend — Task Service
===================================

What:  Create, list, fetch, update, delete and bid on task documents.
Who:   Called by routes/tasks.py; one instance per request, built around
       the process-scoped MongoStore.

Ownership checks:
    Update and delete are single filtered writes matching on both `_id` and
    `author.email`, so a non-author can never mutate a task even if the
    document changes between requests. Only when the write matches nothing
    does the service read the task once to tell the caller why:

        no document                   → NotFoundError   (404)
        document, different author    → ForbiddenError  (403)
        document, same author         → raced; 404 for update, 500 for delete

Status precedence for PATCH is 404 → 403 → 400, so an invalid body is
classified against the stored task before its ValidationError is raised.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from app.config import settings
from app.database import MongoStore
from app.exceptions import DatabaseError, ForbiddenError, NotFoundError
from app.models import task as task_model
from app.schemas.task import TaskCreateRequest, TaskUpdateRequest
from app.services.serialization import serialize_document
from app.services.validation import (
    normalize_email,
    parse_object_id,
    raise_for_errors,
    validate_task_fields,
)

logger = logging.getLogger(__name__)


class TaskService:
    """
    Business logic for task documents.

    Error Handling Strategy:
        ValidationError / ForbiddenError / NotFoundError are raised directly
        and pass through untouched. Any PyMongoError is logged with the task
        id and wrapped in DatabaseError (→ generic 500).
    """

    def __init__(self, store: MongoStore, list_limit: Optional[int] = None):
        self.store = store
        self.list_limit = list_limit or settings.task_list_limit

    # ── Create ────────────────────────────────────────────────────────────

    async def create_task(self, payload: TaskCreateRequest) -> str:
        """
        Validate and insert a new task.

        Returns:
            The generated task id as a hex string.

        Raises:
            ValidationError: first failing field check (all failures in details)
            DatabaseError: insert failed
        """
        raw = payload.model_dump(by_alias=True)
        fields, errors = validate_task_fields(raw, require_author=True)
        raise_for_errors(errors)

        author_name = payload.user_name if isinstance(payload.user_name, str) else ""
        doc = task_model.build_task(
            fields,
            author_email=str(payload.user_email).strip().lower(),
            author_name=author_name,
            now=datetime.now(timezone.utc),
        )

        try:
            result = await self.store.tasks.insert_one(doc)
        except PyMongoError as e:
            logger.error("Database error creating task: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        task_id = str(result.inserted_id)
        logger.info("Task %s created by %s", task_id, doc["author"]["email"])
        return task_id

    # ── Read ──────────────────────────────────────────────────────────────

    async def list_tasks(self, email: Optional[str] = None, category: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Newest-first task listing, ANDed filters, capped at `list_limit`.

        Args:
            email: Author email filter (lower-cased before matching)
            category: Exact category filter
        """
        query: Dict[str, Any] = {}
        if email and email.strip():
            query["author.email"] = email.strip().lower()
        if category:
            query["category"] = category

        try:
            cursor = self.store.tasks.find(query).sort("createdAt", DESCENDING).limit(self.list_limit)
            docs = await cursor.to_list(length=self.list_limit)
        except PyMongoError as e:
            logger.error("Database error listing tasks: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        return [serialize_document(doc) for doc in docs]

    async def get_task(self, task_id: str) -> Dict[str, Any]:
        """
        Fetch one task, unmodified apart from JSON encoding.

        Raises:
            ValidationError: malformed id
            NotFoundError: no such task
        """
        oid = parse_object_id(task_id)
        doc = await self._find(oid)
        if doc is None:
            raise NotFoundError(resource="task", resource_id=task_id)
        return serialize_document(doc)

    # ── Update ────────────────────────────────────────────────────────────

    async def update_task(self, task_id: str, email: Optional[str], payload: TaskUpdateRequest) -> str:
        """
        Replace the editable fields of a task owned by `email`.

        Leaves status, author, createdAt and bidsCount untouched.

        Raises:
            ValidationError: email missing, malformed id, or invalid field
            NotFoundError: no such task (or it vanished mid-request)
            ForbiddenError: email is not the task author
        """
        author_email = normalize_email(email)
        oid = parse_object_id(task_id)

        fields, errors = validate_task_fields(payload.model_dump(by_alias=True))
        if errors:
            await self._authorize(oid, author_email)
            raise_for_errors(errors)

        update = task_model.build_update(fields, now=datetime.now(timezone.utc))
        try:
            result = await self.store.tasks.update_one(
                {"_id": oid, "author.email": author_email}, update
            )
        except PyMongoError as e:
            logger.error("Database error updating task %s: %s", task_id, str(e), exc_info=True)
            raise DatabaseError(context={"task_id": task_id, "error_type": type(e).__name__})

        if result.matched_count == 0:
            await self._authorize(oid, author_email)
            # Author matched on re-read: the filtered write raced a delete/recreate
            raise NotFoundError(resource="task", resource_id=task_id)

        logger.info("Task %s updated by %s", task_id, author_email)
        return task_id

    # ── Delete ────────────────────────────────────────────────────────────

    async def delete_task(self, task_id: str, email: Optional[str]) -> str:
        """
        Remove a task owned by `email`.

        Raises:
            ValidationError: email missing or malformed id
            NotFoundError: no such task
            ForbiddenError: email is not the task author
            DatabaseError: zero deletions although the author's task exists
        """
        author_email = normalize_email(email)
        oid = parse_object_id(task_id)

        try:
            result = await self.store.tasks.delete_one({"_id": oid, "author.email": author_email})
        except PyMongoError as e:
            logger.error("Database error deleting task %s: %s", task_id, str(e), exc_info=True)
            raise DatabaseError(context={"task_id": task_id, "error_type": type(e).__name__})

        if result.deleted_count == 0:
            await self._authorize(oid, author_email)
            logger.error("Delete of task %s removed nothing although it exists", task_id)
            raise DatabaseError(
                message="Delete failed",
                context={"task_id": task_id},
            )

        logger.info("Task %s deleted by %s", task_id, author_email)
        return task_id

    # ── Bid ───────────────────────────────────────────────────────────────

    async def place_bid(self, task_id: str) -> int:
        """
        Atomically increment bidsCount.

        Returns:
            The bidsCount value after the increment.
        """
        oid = parse_object_id(task_id)
        try:
            doc = await self.store.tasks.find_one_and_update(
                {"_id": oid},
                {"$inc": {"bidsCount": 1}},
                projection={"bidsCount": 1},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Database error bidding on task %s: %s", task_id, str(e), exc_info=True)
            raise DatabaseError(context={"task_id": task_id, "error_type": type(e).__name__})

        if doc is None:
            raise NotFoundError(resource="task", resource_id=task_id)
        return int(doc.get("bidsCount", 0))

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _find(self, oid: ObjectId) -> Optional[Dict[str, Any]]:
        try:
            return await self.store.tasks.find_one({"_id": oid})
        except PyMongoError as e:
            logger.error("Database error fetching task %s: %s", oid, str(e), exc_info=True)
            raise DatabaseError(context={"task_id": str(oid), "error_type": type(e).__name__})

    async def _authorize(self, oid: ObjectId, author_email: str) -> Dict[str, Any]:
        """
        Classify access to a task: 404 when missing, 403 for another author.

        Returns the stored document when `author_email` owns it.
        """
        doc = await self._find(oid)
        if doc is None:
            raise NotFoundError(resource="task", resource_id=str(oid))
        stored = (doc.get("author") or {}).get("email")
        if stored != author_email:
            logger.warning("Task %s: %s is not the author", oid, author_email)
            raise ForbiddenError()
        return doc
