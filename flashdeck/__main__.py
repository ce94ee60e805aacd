"""`python -m flashdeck` → uvicorn on BACKEND_HOST:BACKEND_PORT."""

import uvicorn

from flashdeck.config import settings


def main() -> None:
    uvicorn.run(
        "flashdeck.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
