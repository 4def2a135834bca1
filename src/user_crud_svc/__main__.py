import logging

import uvicorn

from user_crud_svc.config import get_settings


def main() -> None:
    """
    Run the service until it is terminated.

    Settings are loaded first so a missing DATABASE_URL stops the process
    before the listener is bound.
    """
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    uvicorn.run(
        "user_crud_svc.app:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_level=settings.LOG_LEVEL.lower(),
        lifespan="on"
    )


if __name__ == "__main__":
    main()
