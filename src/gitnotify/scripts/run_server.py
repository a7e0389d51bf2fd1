from __future__ import annotations

import argparse
import logging
from typing import Optional

import uvicorn

from gitnotify.core.app_config import ConfigError
from gitnotify.core.config import settings
from gitnotify.core.logging_config import configure_logging
from gitnotify.main import create_app
from gitnotify.services.config_store import ConfigStore

logger = logging.getLogger("gitnotify")


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="gitnotify")
    parser.add_argument(
        "--config",
        default=settings.config_path,
        help="Path to configuration file",
    )
    parser.add_argument("--host", default=settings.host, help="Interface to bind")
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)

    logger.info("Loading configuration from: %s", args.config)
    try:
        store = ConfigStore.from_file(args.config)
    except ConfigError as e:
        # fail fast: never serve traffic with a broken config
        logger.error("Invalid configuration: %s", e)
        return 1

    config = store.config
    logger.info("Configuration loaded successfully")
    logger.info("Organization: %s", config.organization)
    logger.info("Port: %d", config.port)
    logger.info("Notification rules: %d", len(store.rules))

    app = create_app(store=store, settings=settings.model_copy(update={"config_path": args.config}))

    base = f"http://localhost:{config.port}"
    logger.info("Starting GitNotify server on port %d", config.port)
    logger.info("Webhook endpoint: %s/webhook", base)
    logger.info("Health check: %s/health", base)
    logger.info("Config API: %s/api/config", base)

    uvicorn.run(app, host=args.host, port=config.port, log_config=None)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
