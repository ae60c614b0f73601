"""Run the API with uvicorn: ``python -m eventhub``."""

import uvicorn

from eventhub.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "eventhub.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,  # structlog owns the root logger
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
