"""
Task Board Backend — Task Service Unit Tests
==============================================

What we test:
    ✅ Create: document shape, lower-cased author, no insert on invalid input
    ✅ List: ANDed filters, newest-first sort, result cap, string ids
    ✅ Get: malformed id (400) vs missing (404)
    ✅ Update/Delete: filtered writes, 404 → 403 → 400 precedence, races
    ✅ Bid: atomic increment, missing task
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import AutoReconnect

from conftest import make_cursor

from app.exceptions import DatabaseError, ForbiddenError, NotFoundError, ValidationError
from app.schemas.task import TaskCreateRequest, TaskUpdateRequest
from app.services.task_service import TaskService

TASK_ID = "65f1c0ffee0ddba11ad0beef"


def create_request(**overrides):
    body = {
        "title": "Design a logo",
        "category": "design",
        "description": "Vector logo for a bakery",
        "deadline": "2025-01-01",
        "budget": 150.5,
        "userEmail": "Owner@X.com",
        "userName": "Owner",
    }
    body.update(overrides)
    return TaskCreateRequest.model_validate(body)


def update_request(**overrides):
    body = {
        "title": "New title",
        "category": "web",
        "description": "New description",
        "deadline": "2025-06-30",
        "budget": "300",
    }
    body.update(overrides)
    return TaskUpdateRequest.model_validate(body)


class TestCreateTask:

    @pytest.mark.asyncio
    async def test_inserts_open_task(self, mock_store):
        new_id = ObjectId()
        mock_store.tasks.insert_one.return_value = MagicMock(inserted_id=new_id)

        task_id = await TaskService(mock_store).create_task(create_request())

        assert task_id == str(new_id)
        doc = mock_store.tasks.insert_one.call_args.args[0]
        assert doc["title"] == "Design a logo"
        assert doc["budget"] == 150.5
        assert doc["deadline"] == datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert doc["status"] == "open"
        assert doc["bidsCount"] == 0
        assert doc["author"] == {"email": "owner@x.com", "name": "Owner"}
        assert doc["createdAt"] == doc["updatedAt"]

    @pytest.mark.asyncio
    async def test_author_name_defaults_to_empty(self, mock_store):
        mock_store.tasks.insert_one.return_value = MagicMock(inserted_id=ObjectId())

        await TaskService(mock_store).create_task(create_request(userName=None))

        doc = mock_store.tasks.insert_one.call_args.args[0]
        assert doc["author"]["name"] == ""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["title", "category", "description", "deadline", "budget", "userEmail"])
    async def test_missing_field_inserts_nothing(self, mock_store, field):
        with pytest.raises(ValidationError) as exc_info:
            await TaskService(mock_store).create_task(create_request(**{field: None}))

        assert exc_info.value.field == field
        mock_store.tasks.insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_non_numeric_budget(self, mock_store):
        with pytest.raises(ValidationError) as exc_info:
            await TaskService(mock_store).create_task(create_request(budget="abc"))

        assert exc_info.value.message == "budget must be a number"

    @pytest.mark.asyncio
    async def test_driver_error_is_database_error(self, mock_store):
        mock_store.tasks.insert_one.side_effect = AutoReconnect("connection reset")

        with pytest.raises(DatabaseError):
            await TaskService(mock_store).create_task(create_request())


class TestListTasks:

    @pytest.mark.asyncio
    async def test_no_filters_sorted_and_capped(self, mock_store, sample_task):
        cursor = make_cursor([sample_task])
        mock_store.tasks.find.return_value = cursor

        items = await TaskService(mock_store).list_tasks()

        mock_store.tasks.find.assert_called_once_with({})
        cursor.sort.assert_called_once_with("createdAt", -1)
        cursor.limit.assert_called_once_with(100)
        assert items[0]["_id"] == TASK_ID
        assert items[0]["author"]["email"] == "owner@x.com"

    @pytest.mark.asyncio
    async def test_filters_are_anded_and_email_lower_cased(self, mock_store):
        mock_store.tasks.find.return_value = make_cursor([])

        await TaskService(mock_store).list_tasks(email="Owner@X.com", category="design")

        mock_store.tasks.find.assert_called_once_with({"author.email": "owner@x.com", "category": "design"})

    @pytest.mark.asyncio
    async def test_custom_limit(self, mock_store):
        cursor = make_cursor([])
        mock_store.tasks.find.return_value = cursor

        await TaskService(mock_store, list_limit=5).list_tasks()

        cursor.limit.assert_called_once_with(5)
        cursor.to_list.assert_awaited_once_with(length=5)


class TestGetTask:

    @pytest.mark.asyncio
    async def test_returns_full_document(self, mock_store, sample_task):
        mock_store.tasks.find_one.return_value = sample_task

        doc = await TaskService(mock_store).get_task(TASK_ID)

        assert doc["_id"] == TASK_ID
        assert doc["budget"] == 150.5
        assert doc["deadline"] == "2025-01-01T00:00:00+00:00"
        mock_store.tasks.find_one.assert_awaited_once_with({"_id": ObjectId(TASK_ID)})

    @pytest.mark.asyncio
    async def test_malformed_id(self, mock_store):
        with pytest.raises(ValidationError):
            await TaskService(mock_store).get_task("nope")
        mock_store.tasks.find_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing(self, mock_store):
        with pytest.raises(NotFoundError):
            await TaskService(mock_store).get_task(TASK_ID)


class TestUpdateTask:

    @pytest.mark.asyncio
    async def test_owner_update_is_filtered_write(self, mock_store):
        mock_store.tasks.update_one.return_value = MagicMock(matched_count=1)

        result = await TaskService(mock_store).update_task(TASK_ID, "OWNER@x.com", update_request())

        assert result == TASK_ID
        query, update = mock_store.tasks.update_one.call_args.args
        assert query == {"_id": ObjectId(TASK_ID), "author.email": "owner@x.com"}
        assert set(update["$set"]) == {"title", "category", "description", "deadline", "budget", "updatedAt"}
        assert update["$set"]["budget"] == 300
        mock_store.tasks.find_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_other_author_forbidden(self, mock_store, sample_task):
        mock_store.tasks.update_one.return_value = MagicMock(matched_count=0)
        mock_store.tasks.find_one.return_value = sample_task

        with pytest.raises(ForbiddenError):
            await TaskService(mock_store).update_task(TASK_ID, "other@x.com", update_request())

    @pytest.mark.asyncio
    async def test_missing_task_not_found(self, mock_store):
        mock_store.tasks.update_one.return_value = MagicMock(matched_count=0)
        mock_store.tasks.find_one.return_value = None

        with pytest.raises(NotFoundError):
            await TaskService(mock_store).update_task(TASK_ID, "owner@x.com", update_request())

    @pytest.mark.asyncio
    async def test_race_after_write_is_not_found(self, mock_store, sample_task):
        mock_store.tasks.update_one.return_value = MagicMock(matched_count=0)
        mock_store.tasks.find_one.return_value = sample_task

        with pytest.raises(NotFoundError):
            await TaskService(mock_store).update_task(TASK_ID, "owner@x.com", update_request())

    @pytest.mark.asyncio
    async def test_missing_email(self, mock_store):
        with pytest.raises(ValidationError):
            await TaskService(mock_store).update_task(TASK_ID, None, update_request())
        mock_store.tasks.update_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_malformed_id(self, mock_store):
        with pytest.raises(ValidationError):
            await TaskService(mock_store).update_task("bad-id", "owner@x.com", update_request())

    @pytest.mark.asyncio
    async def test_invalid_body_from_owner_is_validation_error(self, mock_store, sample_task):
        mock_store.tasks.find_one.return_value = sample_task

        with pytest.raises(ValidationError) as exc_info:
            await TaskService(mock_store).update_task(TASK_ID, "owner@x.com", update_request(title=" "))

        assert exc_info.value.field == "title"
        mock_store.tasks.update_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_body_from_non_author_is_forbidden(self, mock_store, sample_task):
        mock_store.tasks.find_one.return_value = sample_task

        with pytest.raises(ForbiddenError):
            await TaskService(mock_store).update_task(TASK_ID, "other@x.com", update_request(budget="abc"))

    @pytest.mark.asyncio
    async def test_invalid_body_for_missing_task_is_not_found(self, mock_store):
        mock_store.tasks.find_one.return_value = None

        with pytest.raises(NotFoundError):
            await TaskService(mock_store).update_task(TASK_ID, "owner@x.com", update_request(budget="abc"))


class TestDeleteTask:

    @pytest.mark.asyncio
    async def test_owner_delete(self, mock_store):
        mock_store.tasks.delete_one.return_value = MagicMock(deleted_count=1)

        assert await TaskService(mock_store).delete_task(TASK_ID, "Owner@X.com") == TASK_ID
        mock_store.tasks.delete_one.assert_awaited_once_with(
            {"_id": ObjectId(TASK_ID), "author.email": "owner@x.com"}
        )

    @pytest.mark.asyncio
    async def test_other_author_forbidden(self, mock_store, sample_task):
        mock_store.tasks.delete_one.return_value = MagicMock(deleted_count=0)
        mock_store.tasks.find_one.return_value = sample_task

        with pytest.raises(ForbiddenError):
            await TaskService(mock_store).delete_task(TASK_ID, "other@x.com")

    @pytest.mark.asyncio
    async def test_missing_task(self, mock_store):
        mock_store.tasks.delete_one.return_value = MagicMock(deleted_count=0)

        with pytest.raises(NotFoundError):
            await TaskService(mock_store).delete_task(TASK_ID, "owner@x.com")

    @pytest.mark.asyncio
    async def test_zero_deleted_for_existing_owner_task_is_internal_error(self, mock_store, sample_task):
        mock_store.tasks.delete_one.return_value = MagicMock(deleted_count=0)
        mock_store.tasks.find_one.return_value = sample_task

        with pytest.raises(DatabaseError):
            await TaskService(mock_store).delete_task(TASK_ID, "owner@x.com")

    @pytest.mark.asyncio
    async def test_missing_email(self, mock_store):
        with pytest.raises(ValidationError):
            await TaskService(mock_store).delete_task(TASK_ID, "")
        mock_store.tasks.delete_one.assert_not_awaited()


class TestPlaceBid:

    @pytest.mark.asyncio
    async def test_increments_atomically(self, mock_store):
        mock_store.tasks.find_one_and_update.return_value = {"_id": ObjectId(TASK_ID), "bidsCount": 3}

        assert await TaskService(mock_store).place_bid(TASK_ID) == 3

        args, kwargs = mock_store.tasks.find_one_and_update.call_args
        assert args == ({"_id": ObjectId(TASK_ID)}, {"$inc": {"bidsCount": 1}})
        assert kwargs["return_document"] is ReturnDocument.AFTER

    @pytest.mark.asyncio
    async def test_missing_task(self, mock_store):
        with pytest.raises(NotFoundError):
            await TaskService(mock_store).place_bid(TASK_ID)

    @pytest.mark.asyncio
    async def test_malformed_id(self, mock_store):
        with pytest.raises(ValidationError):
            await TaskService(mock_store).place_bid("xyz")
