# Routes package init
"""
NoteKeeper Backend - API Routes Package
========================================

Route Inventory:
    - notes.py:   GET    {prefix}/notes                  (list, filter, paginate)
                  GET    {prefix}/notes/{id}             (single note)
                  POST   {prefix}/notes                  (create)
                  PUT    {prefix}/notes/{id}             (partial update)
                  DELETE {prefix}/notes/{id}             (delete)
                  PATCH  {prefix}/notes/{id}/archive     (and unarchive, done, undone)
    - health.py:  GET    /health                         (service health check)

Routes stay THIN: parse the request, call the validator/store, raise
NotFoundError or ValidationError when a sentinel comes back, wrap the
result in the {success, data} envelope.
"""
