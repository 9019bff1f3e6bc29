"""Entry point for the Wedding Planner API.

Launches the FastAPI application with Uvicorn.  It is intended to be
executed from the project root, for example under Docker, where you
only specify a single Python file to run.

Configuration such as SECRET_KEY, DATABASE_URL and FRONTEND_URL is
read from environment variables by ``wedding_planner_api.app.core.config``.

Usage:
    python run.py
"""
import asyncio
import logging
import os
from uvicorn import Config, Server

from wedding_planner_api.app.main import app


async def run_api() -> None:
    """Start the API using Uvicorn.

    Host and port are read from environment variables `HOST` and
    `PORT`. Defaults are `0.0.0.0` and `5000`.
    """
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "5000"))
    # Logging and levels come from create_app; uvicorn must not replace them.
    config = Config(app=app, host=host, port=port, reload=False, log_config=None)
    server = Server(config)
    await server.serve()


async def main() -> None:
    try:
        await run_api()
    except Exception:
        logging.exception("API server stopped with an error")
        raise


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
