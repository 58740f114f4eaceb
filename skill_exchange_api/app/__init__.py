"""
Application package.

Organised in layers: ``core`` (configuration, logging, security and the
in‑memory store), ``schemas`` (pydantic request/response models),
``services`` (business logic, one class per domain) and ``api`` (one
router per domain under ``api/endpoints``).
"""

from .main import app  # noqa: F401
