"""Server entry point: python -m apimetrics"""

from __future__ import annotations

import uvicorn

from apimetrics.config import ApiMetricsConfig
from apimetrics.observability.logging import setup_logging


def main() -> None:
    config = ApiMetricsConfig.from_yaml()
    setup_logging(config.log_level)

    uvicorn.run(
        "apimetrics.app:create_app",
        factory=True,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
