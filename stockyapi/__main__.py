import uvicorn

from stockyapi.config import get_settings
from stockyapi.main import create_app


def main() -> None:
    settings = get_settings()
    logging_level = settings.LOG_LEVEL.lower()
    uvicorn.run(create_app(), host="0.0.0.0", port=settings.PORT, log_config=None, log_level=logging_level)


if __name__ == "__main__":
    main()
