"""
Transaction service for managing database transactions centrally.
"""

import time
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from reschedule_service.config.logging import get_logger
from reschedule_service.domain.exceptions.store_error import StoreError
from reschedule_service.infrastructure.monitoring.metrics import observe_transaction

logger = get_logger(__name__)

T = TypeVar("T")


class TransactionService:
    """Centralized transaction management service."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.logger = logger

    async def execute_in_transaction(
        self, operation: Callable[[], Awaitable[T]], name: str = "transaction"
    ) -> T:
        """
        Execute an operation within a transaction.

        Args:
            operation: Async function doing every write of one unit of work
            name: Operation name used in logs, metrics and errors

        Returns:
            Result of the operation

        Raises:
            StoreError: The store rejected a read or write; nothing was persisted
            Exception: Any other exception raised by the operation, after rollback
        """
        started = time.perf_counter()
        try:
            result = await operation()

            await self.session.commit()

            self.logger.debug("Transaction committed", operation=name)
            return result

        except SQLAlchemyError as e:
            await self.session.rollback()
            self.logger.error(
                "Transaction rolled back after store failure",
                operation=name,
                error=str(e),
                exc_info=True,
            )
            raise StoreError(name, str(e)) from e

        except Exception as e:
            await self.session.rollback()
            self.logger.info(
                "Transaction rolled back", operation=name, error=str(e)
            )
            raise

        finally:
            observe_transaction(name, time.perf_counter() - started)

    async def commit(self) -> None:
        """Explicitly commit the current transaction."""
        await self.session.commit()
        self.logger.debug("Transaction committed")

    async def rollback(self) -> None:
        """Explicitly rollback the current transaction."""
        await self.session.rollback()
        self.logger.debug("Transaction rolled back")

    async def flush(self) -> None:
        """Flush pending changes to the database."""
        await self.session.flush()
        self.logger.debug("Changes flushed to database")
