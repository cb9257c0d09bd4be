# Services package init
"""
Task Board Backend — Services Layer
=====================================

What:  Business logic layer sitting between routes (HTTP) and the document store.
How:   Services receive the MongoStore in their constructor, apply validation
       and ownership rules, and return plain results. Routes build them per
       request through FastAPI dependencies (see dependencies.py).

Service Inventory:
    - UserService: upsert-by-email, case-compensating lookup
    - TaskService: create, list, get, update, delete, bid
    - validation: ordered task field checks, id/email normalizers
    - serialization: ObjectId/datetime → JSON-safe values
"""
