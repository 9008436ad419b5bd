"""Run the demo server: ``python -m cookiesession``."""

import logging

import uvicorn

from .config import get_settings
from .main import create_app


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    s = get_settings()
    uvicorn.run(create_app(settings=s), host="127.0.0.1", port=s.port)


if __name__ == "__main__":
    main()
