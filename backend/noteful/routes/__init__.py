# Routes package init
"""
Noteful Backend: API Routes Package
===================================

What:  HTTP route handlers that accept requests and return responses.
How:   One module per resource; each exposes a `router` mounted in main.py.

Route Inventory:
    - tags.py:     /api/tags, /api/tags/{id}
    - folders.py:  /api/folders, /api/folders/{id}
    - notes.py:    /api/notes (searchTerm, folderId, tagId), /api/notes/{id}
    - users.py:    POST /api/users, POST /api/login
    - health.py:   GET /health

Routes are thin: they extract request data, call a service, and set the
status code and Location header. Validation and store access live in
noteful.services.
"""
