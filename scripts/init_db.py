import logging

from stockyapi.config import get_settings
from stockyapi.database.connection import Database
from stockyapi.logging_config import setup_logging

logger = logging.getLogger("stockyapi.scripts.init_db")


def init_db():
    """데이터베이스 테이블 생성 (rewards, stock_adjustments, stock_prices)"""
    settings = get_settings()
    database = Database(settings)
    try:
        database.create_tables()
        logger.info(f"Database initialized successfully: {settings.DB_NAME}")
    except Exception as e:
        logger.error(f"Database initialization failed: {str(e)}")
        raise
    finally:
        database.dispose()


if __name__ == "__main__":
    setup_logging(get_settings().LOG_LEVEL)
    init_db()
