# Routes package init
"""
Task Board Backend — API Routes Package
=========================================

Route Inventory:
    - users.py:   POST /users, GET /users/{email}
    - tasks.py:   POST/GET /tasks, GET/PATCH/DELETE /tasks/{id},
                  POST /tasks/{id}/bid
    - health.py:  GET /, GET /health

Routes stay thin: extract request data, call the service, shape the
response. Business rules live in app.services.
"""
