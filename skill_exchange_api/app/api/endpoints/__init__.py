"""
Endpoint modules.

Each module in this package defines an ``APIRouter`` for one domain
(auth, skills, matches, ...).  The routers are aggregated in
``api/router.py`` and mounted under ``/api`` by the application.
"""
