# Routes package init
"""
Roster Backend — API Routes Package
====================================

Route Inventory:
    - users.py:   GET    /api/users          (list users)
                  POST   /api/users          (create user)
                  GET    /api/users/{id}     (get single user)
                  DELETE /api/users/{id}     (delete user)
    - health.py:  GET    /health             (service health check)

Routes stay thin: extract the input, call the repository, return the result
or raise an exception from roster.exceptions.
"""
