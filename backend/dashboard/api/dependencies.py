"""Route Dependencies — per-request construction of service handlers.

Invariants:
    - Handlers are built per request from injected sessions; nothing is shared
      between requests except the engine pool and the revalidator

Design Decisions:
    - Providers live here so tests override get_db / get_session_factory /
      get_revalidator once and every route picks them up
"""

from fastapi import Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dashboard.config import Settings, get_settings
from dashboard.infrastructure.database import get_db, get_session_factory
from dashboard.infrastructure.revalidation import PathRevalidator, get_revalidator
from dashboard.services.dashboard_data import DashboardQueries
from dashboard.services.invoice_actions import InvoiceActions


def no_store(response: Response) -> None:
    """Mark a read response as uncacheable."""
    response.headers["Cache-Control"] = "no-store"


def get_invoice_actions(
    db: AsyncSession = Depends(get_db),
    revalidator: PathRevalidator = Depends(get_revalidator),
    settings: Settings = Depends(get_settings),
) -> InvoiceActions:
    return InvoiceActions(db, revalidator, settings.invoices_path)


def get_dashboard_queries(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> DashboardQueries:
    return DashboardQueries(
        db, revenue_delay_seconds=settings.revenue_fetch_delay_seconds,
    )


def get_card_queries(
    db: AsyncSession = Depends(get_db),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> DashboardQueries:
    return DashboardQueries(db, session_factory=session_factory)
