"""Run the API with uvicorn: ``python -m tasktracker`` or the ``tasktracker`` script."""

import uvicorn

from tasktracker.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "tasktracker.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
