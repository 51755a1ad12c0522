"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from ..engine.context import ContextStore
from ..parser.sdui import SDUIParser
from .config import Settings, get_settings
from .logging_config import configure_from_settings


class EngineModule(Module):
    """Engine dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings or get_settings()

    @singleton
    @provider
    def provide_parser(self, settings: Settings) -> SDUIParser:
        """Provide parser configured from settings (cache included)."""
        return SDUIParser.from_settings(settings)

    @singleton
    @provider
    def provide_context_store(self) -> ContextStore:
        """Provide context store shared by sessions created from this container."""
        return ContextStore()


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector; engine logging follows the settings."""
    settings = settings or get_settings()
    configure_from_settings(settings)
    return Injector([EngineModule(settings)])
