# Routes package init
"""
Filmovi API — Routes Package
=============================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - movies.py:  GET/POST      /filmovi
                  GET/PUT/DELETE /filmovi/{id}
    - system.py:  GET /          (liveness text)
                  GET /health    (database check)
    - docs.py:    GET /swagger.json, /api-docs/swagger.json, /api-docs

Routes are thin: they extract request data, call the repository and pick
the status code. SQL lives in filmovi.repositories.
"""
