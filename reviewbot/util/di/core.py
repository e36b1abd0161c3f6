"""Configuration providers."""

from dishka import Scope, provide

from reviewbot.config import PasswordSettings, SessionSettings, Settings
from reviewbot.persistence.transaction import RequestTransaction
from reviewbot.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings read once from the environment and ``.env``.

    Sections are provided separately so services depend only on what they
    read.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        return Settings()

    @provide
    def provide_password_settings(self, settings: Settings) -> PasswordSettings:
        return settings.password

    @provide
    def provide_session_settings(self, settings: Settings) -> SessionSettings:
        return settings.session


class ProdRequestProvider(ProviderBase):
    """Per-request bookkeeping shared by the error handlers and the stores."""

    scope = Scope.REQUEST

    @provide
    def provide_request_transaction(self) -> RequestTransaction:
        return RequestTransaction()
