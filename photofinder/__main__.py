from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import warnings
from logging.handlers import TimedRotatingFileHandler

import truststore


if __name__ == "__main__":

    truststore.inject_into_ssl()

    from photofinder.config import FILE_FORMATTER, LOG_PATH, LOGGING_LEVELS, ensure_data_dirs
    from photofinder.config.settings import Settings
    from photofinder.utils import format_traceback
    from photofinder.version import __version__

    logger = logging.getLogger("PhotoFinder")
    logger.setLevel(logging.INFO)
    # Always add console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(FILE_FORMATTER)
    logger.addHandler(console_handler)

    warnings.simplefilter("default", ResourceWarning)

    if sys.version_info < (3, 10):
        raise RuntimeError("Python 3.10 or higher is required")

    class ParsedArgs(argparse.Namespace):
        _verbose: int
        _debug_http: bool

        @property
        def logging_level(self) -> int:
            return LOGGING_LEVELS[min(self._verbose, 1)]

        @property
        def debug_http(self) -> int:
            """
            If the debug flag is True, return DEBUG.
            Otherwise, return NOTSET to inherit the main logging level.
            """
            if self._debug_http:
                return logging.DEBUG
            return logging.NOTSET

    # handle input parameters
    parser = argparse.ArgumentParser(
        description="A small web app to find photos by their code and browse the photo gallery.",
    )
    parser.add_argument("--version", action="version", version=f"v{__version__}")
    parser.add_argument("-v", dest="_verbose", action="count", default=0)
    # undocumented debug args
    parser.add_argument(
        "--debug-http", dest="_debug_http", action="store_true", help=argparse.SUPPRESS
    )
    args = parser.parse_args(namespace=ParsedArgs())
    # load settings
    logger.debug("Loading settings")
    try:
        settings = Settings(args)
    except Exception as exc:
        logger.exception("Error while loading settings")
        print(f"Settings error: {format_traceback(exc)}", file=sys.stderr)
        sys.exit(4)

    async def main():
        ensure_data_dirs()
        file_handler = TimedRotatingFileHandler(LOG_PATH, when="midnight", backupCount=5)
        file_handler.setFormatter(FILE_FORMATTER)
        logger.addHandler(file_handler)
        logger.setLevel(settings.logging_level)
        logging.getLogger("PhotoFinder.http").setLevel(settings.debug_http)
        logger.info(f"Logging to file: {LOG_PATH}")

        logger.info("=== Photo Finder Starting ===")
        logger.info(f"Version: {__version__}")
        logger.info(f"Python version: {sys.version}")

        from photofinder.core.client import PhotoFinder
        from photofinder.web import app as webapp

        exit_status = 0
        client = PhotoFinder(settings)
        webapp.set_client(client)
        logger.info(f"Starting web server on http://{settings.host}:{settings.port}")
        client.preload()
        try:
            # uvicorn installs its own SIGINT/SIGTERM handlers and returns once asked to exit
            await webapp.run_server(host=settings.host, port=settings.port)
            logger.info("Web server stopped")
        except Exception:
            logger.exception("Fatal error encountered while running the web server")
            exit_status = 1
        finally:
            logger.info("=== Starting shutdown sequence ===")
            webapp.set_client(None)
            await client.shutdown()
        # save the settings, so that the endpoint URLs can be edited in the file
        client.save(force=True)
        logger.info(f"=== Exiting with status code: {exit_status} ===")
        sys.exit(exit_status)

    asyncio.run(main())
