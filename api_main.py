"""Entry point for the SoundHaven backend.

Run with:
    python api_main.py
or:
    uvicorn api_main:app --port 4000
"""

import sys

import uvicorn

from app.api.fastapi_app import app
from app.config import PORT, validate_settings
from app.core import ConfigError, log_error


def main() -> None:
    try:
        validate_settings()
    except ConfigError as e:
        log_error(str(e))
        sys.exit(1)

    uvicorn.run(app, host="0.0.0.0", port=PORT)


if __name__ == "__main__":
    main()
