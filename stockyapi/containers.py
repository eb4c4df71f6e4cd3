from dependency_injector import containers, providers

from stockyapi.config import get_settings
from stockyapi.database.connection import Database
from stockyapi.services.price_refresher import PriceRefresher


class Container(containers.DeclarativeContainer):
    """Application container."""

    config = providers.Singleton(get_settings)
    database = providers.Singleton(Database, settings=config)
    price_refresher = providers.Singleton(
        PriceRefresher,
        session_factory=database.provided.session_factory,
        settings=config,
    )
