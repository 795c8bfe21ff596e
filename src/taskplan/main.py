"""Entry point for the taskplan API server."""

import logging
import sys

import structlog

from taskplan.config import settings


def configure_logging(level: str | None = None) -> None:
    """Configure structured logging.

    Output goes to stderr so command output on stdout stays machine-readable.
    """
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        level=log_level,
        stream=sys.stderr,
        force=True,
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.WARNING)

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
            structlog.dev.ConsoleRenderer()
            if sys.stderr.isatty()
            else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def run_server(host: str | None = None, port: int | None = None) -> None:
    """Run the API server under uvicorn.

    Args:
        host: Host to bind to (defaults to settings.server_host)
        port: Port to listen on (defaults to settings.server_port)
    """
    import uvicorn

    from taskplan import __version__
    from taskplan.api import create_app

    configure_logging()
    log = structlog.get_logger()

    host = host or settings.server_host
    port = port or settings.server_port

    log.info(
        "Starting taskplan API",
        version=__version__,
        environment=settings.environment,
        host=host,
        port=port,
    )

    uvicorn.run(create_app(), host=host, port=port, log_config=None)


def main() -> None:
    """Main entry point for the server."""
    run_server()


if __name__ == "__main__":
    main()
