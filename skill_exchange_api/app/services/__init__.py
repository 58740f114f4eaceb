"""
Service layer.

Each service encapsulates the business logic of one domain and talks to
the in‑memory store through ``core.storage.get_storage``.  Services
raise ``ValueError`` for domain failures; the endpoints translate those
into HTTP errors.
"""
