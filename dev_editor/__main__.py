"""Run the dev editor API with uvicorn: ``python -m dev_editor``."""

import uvicorn

from dev_editor.config import settings


def main() -> None:
    uvicorn.run(
        "dev_editor.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
