"""Run the API server.

Usage:
    python -m user_api
"""
import logging

import uvicorn

from user_api.core.config import load_settings
from user_api.main import create_app


def main() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == '__main__':
    main()
