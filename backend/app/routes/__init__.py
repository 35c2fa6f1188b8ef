# Routes package init
"""
Inventra Backend — API Routes Package
=======================================

Route Inventory:
    - entities.py:  CRUD for the 14 inventory resources under the API prefix
                    (/api/usuarios, /api/estados, /api/elementos, ...)
    - health.py:    GET /health

Routes stay thin: they take the decoded body, call EntityService, and wrap the
result in the response envelope. Body validation happens before them, in
FieldValidationMiddleware.
"""
