"""
Task Board Backend — Service Dependencies
===========================================

What:  FastAPI providers that build a service around the process-scoped store.
How:   get_store (database.py) resolves the MongoStore from app.state, these
       wrap it. Tests replace get_store through app.dependency_overrides.
"""

from fastapi import Depends

from app.database import MongoStore, get_store
from app.services.task_service import TaskService
from app.services.user_service import UserService


def get_user_service(store: MongoStore = Depends(get_store)) -> UserService:
    return UserService(store)


def get_task_service(store: MongoStore = Depends(get_store)) -> TaskService:
    return TaskService(store)
