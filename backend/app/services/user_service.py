"""
Task Board Backend — User Service
===================================

What:  Upsert-by-email and lookup for the `users` collection.
Who:   Called by routes/users.py; one instance per request, built around
       the process-scoped MongoStore.

Casing policy:
    Emails are lower-cased before they are written, so new documents are
    always canonical. Lookups try the exact value first and then the
    lower-cased one, which keeps mixed-case documents written before the
    policy reachable.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Tuple

from pymongo.errors import DuplicateKeyError, PyMongoError

from app.database import MongoStore
from app.exceptions import ConflictError, DatabaseError, NotFoundError, ValidationError
from app.models import user as user_model
from app.schemas.user import UserUpsertRequest

logger = logging.getLogger(__name__)


class UserService:
    """
    Business logic for user documents.

    Error Handling Strategy:
        Client mistakes raise ValidationError / NotFoundError directly.
        A DuplicateKeyError on upsert becomes ConflictError (the unique
        index can still race a concurrent first write). Any other
        PyMongoError is logged and wrapped in DatabaseError.
    """

    def __init__(self, store: MongoStore):
        self.store = store

    async def upsert_user(self, payload: UserUpsertRequest) -> Tuple[bool, str]:
        """
        Create or refresh the user identified by `payload.email`.

        Returns:
            (created, email): created is True when a new document was
            inserted; email is the normalized key that was written.

        Raises:
            ValidationError: email missing or blank (nothing is written)
            ConflictError: duplicate key reported despite the upsert
            DatabaseError: any other store failure
        """
        if payload.email is None or not payload.email.strip():
            raise ValidationError(message="Email is required", field="email")

        email = payload.email.strip().lower()
        now = datetime.now(timezone.utc)
        update = user_model.build_upsert(
            name=payload.name if payload.name is not None else "",
            photo=payload.photo if payload.photo is not None else "",
            bio=payload.bio if payload.bio is not None else "",
            auth_provider=(
                payload.auth_provider
                if payload.auth_provider is not None
                else user_model.DEFAULT_AUTH_PROVIDER
            ),
            now=now,
        )

        try:
            result = await self.store.users.update_one({"email": email}, update, upsert=True)
        except DuplicateKeyError:
            logger.warning("Duplicate key on user upsert for %s", email)
            raise ConflictError(context={"email": email})
        except PyMongoError as e:
            logger.error("Database error upserting user %s: %s", email, str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        created = result.upserted_id is not None
        logger.info("User %s %s", email, "created" if created else "updated")
        return created, email

    async def get_user(self, email: str) -> Dict[str, Any]:
        """
        Fetch the public projection of a user.

        Lookup order: exact email, then lower-cased email (second query
        skipped when the value is already lower-case).

        Raises:
            ValidationError: empty email parameter
            NotFoundError: neither lookup matched
        """
        if email is None or not email.strip():
            raise ValidationError(message="Email is required", field="email")

        email = email.strip()
        try:
            doc = await self.store.users.find_one({"email": email}, user_model.PUBLIC_PROJECTION)
            lowered = email.lower()
            if doc is None and lowered != email:
                doc = await self.store.users.find_one({"email": lowered}, user_model.PUBLIC_PROJECTION)
        except PyMongoError as e:
            logger.error("Database error fetching user %s: %s", email, str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        if doc is None:
            raise NotFoundError(resource="user", resource_id=email)
        return doc
