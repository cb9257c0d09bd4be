"""
Task Board Backend — Application Package
==========================================

Layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, ownership rules
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Document shapes + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← MongoStore (AsyncMongoClient)
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
