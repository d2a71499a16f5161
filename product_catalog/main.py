import logging

import uvicorn

from product_catalog.config import get_config


def main() -> None:
    """Run the product catalog API under uvicorn."""
    config = get_config()
    logging.basicConfig(level=config.logging.level)

    uvicorn.run(
        "product_catalog.api:app",
        host=config.server.host,
        port=config.server.port,
        log_level=config.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
