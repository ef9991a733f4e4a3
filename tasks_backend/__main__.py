import os

import uvicorn

from .api.main import create_app
from .config import get_settings
from .logging_setup import setup_logging


def main():
    settings = get_settings()
    setup_logging(settings.log_level)
    uvicorn.run(
        create_app(settings),
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "5000")),
        log_config=None,
    )


if __name__ == "__main__":
    main()
