"""Invoice ORM — a billed amount owed by a customer.

Invariants:
    - amount is integer minor units (cents), always user-facing value ×100
    - status is one of: pending, paid
    - date is an ISO-8601 UTC string stamped by the server on create, never updated

Design Decisions:
    - date stored as string: every stamp comes from datetime.isoformat() in UTC,
      so lexicographic ORDER BY equals chronological order
    - customer relationship is lazy="raise": queries join explicitly, async
      sessions must never lazy-load
"""

import uuid

from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from dashboard.db.base import Base


class Invoice(Base):
    """Invoice entity — linked to its customer by customer_id."""
    __tablename__ = "invoices"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    customer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("customers.id"),
        nullable=False, index=True,
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    date: Mapped[str] = mapped_column(String(40), nullable=False, index=True)

    # Relationships
    customer: Mapped["Customer"] = relationship(
        "Customer", back_populates="invoices", lazy="raise",
    )
