"""Per-request transaction outcome."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


class RequestTransaction:
    """Whether the current request's writes may be committed.

    FastAPI exception handlers turn domain and store errors into responses
    before they reach the session provider, so they mark the request
    failed here instead.
    """

    def __init__(self) -> None:
        self.error_type: str | None = None

    @property
    def failed(self) -> bool:
        return self.error_type is not None

    def mark_failed(self, error: BaseException) -> None:
        self.error_type = type(error).__name__


@asynccontextmanager
async def request_session(
    session_factory: async_sessionmaker[AsyncSession],
    transaction: RequestTransaction,
) -> AsyncIterator[AsyncSession]:
    """Session committed at the end of a successful request only.

    Rolled back when an exception escapes the request or when the request
    was marked failed.
    """
    async with session_factory() as session:
        try:
            yield session
        except Exception as e:
            logfire.warn(
                "Request transaction rolled back", error_type=type(e).__name__
            )
            await session.rollback()
            raise

        if transaction.failed:
            logfire.warn(
                "Request transaction rolled back", error_type=transaction.error_type
            )
            await session.rollback()
        else:
            await session.commit()
