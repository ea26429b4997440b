"""Protean Engine runner for the storefront domain.

With PROTEAN_ENV=production, event processing is asynchronous: the API only
records events and this Engine delivers them to the notification handlers.

Usage:
    PROTEAN_ENV=production python src/server.py
"""

import argparse
import asyncio

from protean.server.engine import Engine

from storefront.domain import logger, storefront


async def run(test_mode: bool = False):
    storefront.init()
    engine = Engine(storefront, test_mode=test_mode)
    logger.info("engine_starting", domain=storefront.name, test_mode=test_mode)
    await engine.run()


def main():
    parser = argparse.ArgumentParser(description="Storefront Engine runner")
    parser.add_argument(
        "--test-mode",
        action="store_true",
        help="Process pending messages once and exit",
    )
    args = parser.parse_args()

    asyncio.run(run(test_mode=args.test_mode))


if __name__ == "__main__":
    main()
