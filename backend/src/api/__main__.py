"""Entry point for running the API server."""
import uvicorn

from core.config import get_settings
from core.logging_config import setup_logging


def main() -> None:
    """Configure logging and serve the API with uvicorn."""
    settings = get_settings()
    setup_logging(settings.log_level)
    uvicorn.run(
        "api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
