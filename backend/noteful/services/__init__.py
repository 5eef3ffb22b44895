# Services package init
"""
Noteful Backend: Services Layer
===============================

What:  Business logic layer sitting between routes (HTTP) and the document
       store adapter (noteful.store).
How:   Services validate input, call the store on the request's session,
       translate store results into application exceptions, and return
       response schemas.

Service Inventory:
    - NamedResourceService: shared CRUD for uniquely named collections
    - TagService:    tags; delete pulls the tag from every note
    - FolderService: folders; delete detaches notes from the folder
    - NoteService:   notes; search/filter listing, reference validation
    - UserService:   registration and credential checks
"""
