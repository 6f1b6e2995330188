# Entrypoint for running the FastAPI application with uv.

import logging

import uvicorn

from healthstatus.settings import get_settings


def main() -> None:
    """Start the FastAPI server using uvicorn."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    uvicorn.run(
        "healthstatus.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=False,
    )


if __name__ == "__main__":
    main()
