"""
Serve the backend with uvicorn.

Usage:
    python -m backend
    python -m backend --host 127.0.0.1 --port 8080
"""

from __future__ import annotations

import argparse
import logging

import uvicorn

from backend.app import create_app
from backend.config import load_settings

logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Contact & AI backend server")
    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind to (default: HOST or 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind to (default: PORT or 3000)",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Dotenv file to read settings from",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: LOG_LEVEL or INFO)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=(args.log_level or "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = load_settings(args.env_file)
    log_level = (args.log_level or settings.log_level).upper()
    logging.getLogger().setLevel(log_level)

    host = args.host or settings.host
    port = args.port or settings.port
    app = create_app(settings)
    logger.info("Server running on http://%s:%s", host, port)
    uvicorn.run(app, host=host, port=port, log_level=log_level.lower())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
