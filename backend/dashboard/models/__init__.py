"""ORM Models — SQLAlchemy declarative models for all dashboard entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Invoice references Customer; Revenue stands alone (read-only aggregate)

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from dashboard.models.customer import Customer  # noqa: F401
from dashboard.models.invoice import Invoice  # noqa: F401
from dashboard.models.revenue import Revenue  # noqa: F401
