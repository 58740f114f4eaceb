"""
Top‑level package for the Skill Exchange API.

All functionality lives in ``skill_exchange_api.app``; this marker
makes the fully qualified imports used throughout the code base (and
by the tests) resolve from the project root.
"""

__all__ = []
