from __future__ import annotations

import uvicorn

from .logging_config import configure_logging
from .settings import settings


def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    # log_config=None leaves uvicorn's loggers propagating to ours
    uvicorn.run(
        "embeddings_server.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
    )


if __name__ == "__main__":
    main()
