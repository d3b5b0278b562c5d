"""Application entry point for the pingate server."""

import structlog

from pingate.app import App
from pingate.config import Config
from pingate.logging import setup_logging
from pingate.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    structlog.get_logger(__name__).info(
        "starting",
        host=config.host,
        port=config.port,
        token_ttl_ms=config.token_ttl_ms,
        rate_limit_enabled=config.rate_limit_enabled,
    )
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
