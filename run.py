"""Run the Skill Exchange API with Uvicorn.

Host and port come from the ``HOST`` and ``PORT`` environment variables
(defaults ``0.0.0.0`` and ``5000``).

Usage:
    python run.py
"""
import uvicorn

from skill_exchange_api.app.core.config import settings


def main() -> None:
    uvicorn.run(
        "skill_exchange_api.app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
