"""Run the apikeygate service: ``python -m apikeygate [--config PATH]``."""

import argparse
import logging
import sys
from pathlib import Path

from apikeygate.config import DEFAULT_CONFIG_PATH, load_config
from apikeygate.keystore import KeyStore
from apikeygate.server import create_app

log = logging.getLogger("apikeygate")


def main() -> None:
    from aiohttp import web

    parser = argparse.ArgumentParser(description="ApiKey auth_request service")
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help=f"YAML settings file (default: {DEFAULT_CONFIG_PATH})",
    )
    args = parser.parse_args()

    settings = load_config(args.config)
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    keystore = KeyStore.from_yaml(settings.keys_path)
    log.info("Listening on %s:%d", settings.host, settings.port)
    web.run_app(create_app(keystore), host=settings.host, port=settings.port, print=None)


if __name__ == "__main__":
    main()
