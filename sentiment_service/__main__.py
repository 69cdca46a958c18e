"""Run the sentiment API server.

Usage:
    python -m sentiment_service
    python -m sentiment_service -C ./config.json
    python -m sentiment_service --conf https://config.example.com/sentiment.json --port 9000
"""

from __future__ import annotations

import argparse
import logging
import sys

import uvicorn

from sentiment_service.config import ConfigError, get_service_config, settings

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Hooked sentiment analysis server")
    parser.add_argument(
        "-C",
        "--conf",
        default=settings.config_path,
        help=f"Hook configuration file path or http(s) URL (default: {settings.config_path})",
    )
    parser.add_argument("--host", default=settings.api_host, help="Bind address")
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Listen port (default: config file 'port', then API_PORT)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Must happen before anything loads the cached service config.
    settings.config_path = args.conf
    try:
        config = get_service_config()
    except ConfigError as exc:
        logger.error("%s", exc)
        return 1

    port = args.port or config.port or settings.api_port
    logger.info("Listening at http://%s:%d with %d hook(s)", args.host, port, len(config.hooks))

    from sentiment_service.api.main import app

    uvicorn.run(app, host=args.host, port=port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
