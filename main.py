"""
Entrypoint: parse flags, load config, set up logging, create the destination
directory and run the downloader
"""

import argparse
import logging
import sys
from pathlib import Path

import structlog
from dotenv import load_dotenv

from downloader.config import Config
from downloader.errors import ConfigError, DecodeError, DownloaderError
from downloader.fetcher import HTTPFetcher
from downloader.pager import PexelsPageSource, build_initial_request
from downloader.worker import Downloader

DEFAULT_DESTINATION = "output"
DEFAULT_QUERY = "people"

logger = structlog.get_logger(__name__)


def setup_logging(level: str = "INFO"):
    """Route structlog through stdlib logging, JSON lines on stdout."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, str(level).upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Download Pexels search results to a folder')
    parser.add_argument('-key', '--key', default=None, help='authorization key')
    parser.add_argument('-dst', '--dst', default=None, help='folder to save photos')
    parser.add_argument('-query', '--query', default=None, help='query for search')
    parser.add_argument('-config', '--config', default=None, help='path to a YAML config file')
    return parser.parse_args(argv)


def main(argv=None, transport=None) -> int:
    """Run one download. Returns the process exit status."""
    load_dotenv()
    args = parse_args(argv)

    try:
        config = Config(args.config)
    except ConfigError as e:
        setup_logging()
        logger.error("fatal", error=str(e), error_type=type(e).__name__)
        return 1

    setup_logging(config.logging.get('level', 'INFO'))

    key = args.key or config.pexels.get('api_key')
    if not key:
        logger.error("fatal", error="no key provided", error_type=ConfigError.__name__)
        return 1

    dst = args.dst or config.downloader.get('destination')
    if not dst:
        logger.info("using_default_destination", destination=DEFAULT_DESTINATION)
        dst = DEFAULT_DESTINATION

    try:
        Path(dst).mkdir(exist_ok=True)
    except OSError as e:
        logger.error("fatal", error=f"cannot create destination directory: {e}", destination=str(dst))
        return 1

    query = args.query
    if query is None:
        query = config.downloader.get('query') or DEFAULT_QUERY

    try:
        first_uri = build_initial_request(query)

        with HTTPFetcher(timeout=config.fetcher.get('timeout'), transport=transport) as fetcher:
            source = PexelsPageSource(fetcher, key)
            Downloader(source, fetcher, dst).run(first_uri)

    except DecodeError as e:
        logger.error("fatal",
                     error=str(e),
                     error_type=type(e).__name__,
                     url=e.url,
                     body=e.body.decode('utf-8', errors='replace'))
        return 1

    except DownloaderError as e:
        logger.error("fatal", error=str(e), error_type=type(e).__name__, url=e.url)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
