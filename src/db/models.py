"""SQLAlchemy ORM models for expense records."""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import JSON, Boolean, DateTime, Index, Integer, Numeric, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class ExpenseReviewError(Exception):
    """Raised when an expense is no longer pending and cannot change."""


class Expense(Base):
    __tablename__ = "expenses"
    __table_args__ = (
        Index("ix_expenses_user_date", "user_id", "date"),
        # Duplicate-amount lookups
        Index("ix_expenses_user_amount_date", "user_id", "amount", "date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    category: Mapped[str] = mapped_column(String)
    description: Mapped[str] = mapped_column(String(500))
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    receipt_url: Mapped[str | None] = mapped_column(String, nullable=True)

    status: Mapped[str] = mapped_column(String, default="pending", index=True)
    reviewed_by: Mapped[str | None] = mapped_column(String, nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    review_notes: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    is_flagged: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    flag_reason: Mapped[str | None] = mapped_column(String, nullable=True)
    flagged_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    fraud_metadata: Mapped[dict] = mapped_column(JSON, default=dict)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def approve(self, reviewer_id: str, notes: str = "", now: datetime | None = None) -> None:
        self._review("approved", reviewer_id, notes, now)

    def reject(self, reviewer_id: str, notes: str = "", now: datetime | None = None) -> None:
        self._review("rejected", reviewer_id, notes, now)

    def _review(self, status: str, reviewer_id: str, notes: str, now: datetime | None) -> None:
        if self.status != "pending":
            raise ExpenseReviewError(f"Expense {self.id} has already been reviewed")
        self.status = status
        self.reviewed_by = reviewer_id
        self.reviewed_at = now or datetime.now(UTC)
        self.review_notes = notes
