"""Entry point for the Syllabus Hierarchy API server.

Reads the settings from the environment once, builds the application
and serves it with Uvicorn on ``HOST``:``PORT`` (``0.0.0.0:8080`` by
default).  Uvicorn handles SIGINT/SIGTERM and gives in-flight requests
up to ten seconds to finish.

Usage:
    python run.py
"""
import uvicorn

from syllabus_api.app.core.config import Settings
from syllabus_api.app.core.logging_config import uvicorn_log_level
from syllabus_api.app.main import create_app


def main() -> None:
    settings = Settings.from_env()
    config = uvicorn.Config(
        app=create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=uvicorn_log_level(settings.log_level),
        timeout_graceful_shutdown=10,
    )
    server = uvicorn.Server(config)
    server.run()


if __name__ == "__main__":
    main()
