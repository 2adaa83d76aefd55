"""
Run the API with uvicorn: `python -m filmovi` or the `filmovi` script.

Host and port come from settings (HOST, PORT; port defaults to 3000).
"""

import uvicorn

from filmovi.config import settings


def main() -> None:
    uvicorn.run(
        "filmovi.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
