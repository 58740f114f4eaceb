"""
HTTP layer of the Skill Exchange API.

``router`` aggregates one router per domain from ``endpoints``; the
application mounts it under ``/api``.
"""
