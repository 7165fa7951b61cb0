"""Run the service with uvicorn: ``python -m customer_orders``."""

import uvicorn

from .config import settings


def main() -> None:
    uvicorn.run(
        "customer_orders.app:app",
        host=settings.SERVICE_HOST,
        port=settings.SERVICE_PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
