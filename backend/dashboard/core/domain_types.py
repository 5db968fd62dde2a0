"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - InvoiceId wraps UUIDs — never use bare UUID in domain logic
    - MinorUnits is an integer amount of cents; display values are derived from it
    - Invoice status is one of InvoiceStatus — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

InvoiceId = NewType("InvoiceId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

MinorUnits = NewType("MinorUnits", int)   # cents


# ─── Constants ───────────────────────────────────────────────────

ITEMS_PER_PAGE = 6
LATEST_INVOICES_LIMIT = 5


# ─── Enums ───────────────────────────────────────────────────────

class InvoiceStatus(str, Enum):
    """Invoice lifecycle states — maps to DB `status` column."""
    PENDING = "pending"
    PAID = "paid"
