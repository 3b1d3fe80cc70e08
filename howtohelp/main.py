#!/usr/bin/env python3
"""
HowToHelp Site - Entry Point

This module serves as the main entry point for the site. It sets up logging
and either runs the web server or writes the sitemap once and exits.
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import structlog
import uvicorn

from howtohelp.cache import get_cache_client
from howtohelp.cms import ContentAPIClient
from howtohelp.config import LogLevel, Settings, load_settings
from howtohelp.resolvers import build_sitemap, render_sitemap_xml

# Set up structured logger
logger = structlog.get_logger()


def setup_logging(settings: Settings) -> None:
    """Set up structured logging based on configuration."""
    log_level = settings.metrics.log_level.value

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if settings.metrics.structured_logging
            else structlog.dev.ConsoleRenderer()
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Set log level on the standard library root logger so that
    # libraries using logging propagate correctly.
    numeric_level = getattr(logging, log_level, logging.INFO)
    logging.basicConfig(level=numeric_level, format="%(message)s")
    logging.getLogger().setLevel(numeric_level)

    logger.info("Logging initialized", level=log_level)


async def write_sitemap(settings: Settings, output: Optional[Path]) -> int:
    """Build the sitemap once and write it to a file or stdout."""
    cache = get_cache_client(settings.cache)
    try:
        async with ContentAPIClient(settings.cms, cache=cache) as client:
            entries = await build_sitemap(client, settings.site.url)
    finally:
        if cache is not None:
            await cache.close()

    xml = render_sitemap_xml(entries)
    if output is None:
        sys.stdout.write(xml)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(xml, encoding="utf-8")
        logger.info("Sitemap written", path=str(output), entries=len(entries))
    return 0


def run_server(settings: Settings) -> int:
    """Run the web front-end until interrupted."""
    from howtohelp.web.app import create_app

    app = create_app(settings)
    uvicorn.run(
        app,
        host=settings.web.host,
        port=settings.web.port,
        log_level=settings.metrics.log_level.value.lower(),
        access_log=True,
    )
    return 0


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="HowToHelp Site - blog front-end backed by a headless CMS"
    )

    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        default=None,
        help="Set the log level"
    )

    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the web server")
    serve.add_argument("--host", default=None, help="Bind address")
    serve.add_argument("--port", type=int, default=None, help="Bind port")

    sitemap = subparsers.add_parser("sitemap", help="Write sitemap.xml and exit")
    sitemap.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output file (defaults to stdout)"
    )

    args = parser.parse_args(argv)
    if args.command is None:
        args.command = "serve"
        args.host = None
        args.port = None
    return args


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the application."""
    try:
        args = parse_args(argv)

        settings = load_settings()

        if args.log_level:
            settings.metrics.log_level = LogLevel(args.log_level)

        setup_logging(settings)

        logger.info(
            "HowToHelp site starting up",
            version=settings.version,
            environment=settings.environment.value,
            command=args.command,
        )

        if not settings.cms.is_configured():
            logger.warning("CMS base URL is not configured; every fetch will fail")

        if args.command == "sitemap":
            return asyncio.run(write_sitemap(settings, args.output))

        if args.host:
            settings.web.host = args.host
        if args.port:
            settings.web.port = args.port
        return run_server(settings)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130

    except Exception as e:
        logger.exception("Unhandled exception", error=str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
