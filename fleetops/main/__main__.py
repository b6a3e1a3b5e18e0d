"""
Main module entry point.

Runs the API server: python -m fleetops.main
"""

import uvicorn

from .config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "fleetops.main.app:app",
        host=settings.ge.host,
        port=settings.ge.port,
        reload=settings.ge.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
