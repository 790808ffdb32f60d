"""Read-side query contract over historical expenses, plus its SQLAlchemy implementation."""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import Expense

from .models import HistoricalExpense


class ExpenseStore(ABC):
    """Queries the screening rules and statistics need.

    ``exclude_id`` is the candidate's own record id when re-screening; it must
    never be returned or counted.
    """

    # Whether queries may be awaited concurrently (asyncio.gather)
    supports_concurrent_reads: bool = True

    @abstractmethod
    async def find_same_amount(
        self,
        user_id: str,
        amount: Decimal,
        start: datetime,
        end: datetime,
        exclude_id: int | None = None,
    ) -> list[HistoricalExpense]:
        """Expenses with exactly ``amount`` whose occurrence date is in [start, end]."""
        ...

    @abstractmethod
    async def find_similar_descriptions(
        self,
        user_id: str,
        description: str,
        created_since: datetime,
        exclude_id: int | None = None,
    ) -> list[HistoricalExpense]:
        """Expenses created since ``created_since`` whose description contains
        ``description``, case-insensitively."""
        ...

    @abstractmethod
    async def count_created_since(
        self,
        user_id: str,
        created_since: datetime,
        exclude_id: int | None = None,
    ) -> int:
        ...

    @abstractmethod
    async def count_expenses(
        self,
        is_flagged: bool | None = None,
        status: str | None = None,
    ) -> int:
        """System-wide count, optionally filtered by flag and status."""
        ...


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def to_historical(row: Expense) -> HistoricalExpense:
    return HistoricalExpense(
        expense_id=row.id,
        user_id=row.user_id,
        amount=row.amount,
        category=row.category,
        description=row.description,
        date=row.date,
        created_at=row.created_at,
        status=row.status,
        is_flagged=row.is_flagged,
    )


class SQLAlchemyExpenseStore(ExpenseStore):
    """ExpenseStore backed by the ``expenses`` table.

    One instance wraps one AsyncSession, so its queries must not be awaited
    concurrently.
    """

    supports_concurrent_reads = False

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_same_amount(
        self,
        user_id: str,
        amount: Decimal,
        start: datetime,
        end: datetime,
        exclude_id: int | None = None,
    ) -> list[HistoricalExpense]:
        stmt = select(Expense).where(
            Expense.user_id == user_id,
            Expense.amount == amount,
            Expense.date >= start,
            Expense.date <= end,
        )
        if exclude_id is not None:
            stmt = stmt.where(Expense.id != exclude_id)

        result = await self._session.execute(stmt)
        return [to_historical(row) for row in result.scalars().all()]

    async def find_similar_descriptions(
        self,
        user_id: str,
        description: str,
        created_since: datetime,
        exclude_id: int | None = None,
    ) -> list[HistoricalExpense]:
        pattern = f"%{_escape_like(description)}%"
        stmt = select(Expense).where(
            Expense.user_id == user_id,
            Expense.description.ilike(pattern, escape="\\"),
            Expense.created_at >= created_since,
        )
        if exclude_id is not None:
            stmt = stmt.where(Expense.id != exclude_id)

        result = await self._session.execute(stmt)
        return [to_historical(row) for row in result.scalars().all()]

    async def count_created_since(
        self,
        user_id: str,
        created_since: datetime,
        exclude_id: int | None = None,
    ) -> int:
        stmt = select(func.count()).select_from(Expense).where(
            Expense.user_id == user_id,
            Expense.created_at >= created_since,
        )
        if exclude_id is not None:
            stmt = stmt.where(Expense.id != exclude_id)

        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def count_expenses(
        self,
        is_flagged: bool | None = None,
        status: str | None = None,
    ) -> int:
        stmt = select(func.count()).select_from(Expense)
        if is_flagged is not None:
            stmt = stmt.where(Expense.is_flagged.is_(is_flagged))
        if status is not None:
            stmt = stmt.where(Expense.status == status)

        result = await self._session.execute(stmt)
        return result.scalar_one()
