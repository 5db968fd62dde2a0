"""Dashboard Routes — revenue chart and summary cards.

Invariants:
    - Both endpoints are read-only and uncacheable (Cache-Control: no-store)

Design Decisions:
    - Cards use their own dependency: the four aggregates need a session factory,
      not just the request session
"""

from fastapi import APIRouter, Depends

from dashboard.api.dependencies import (
    get_card_queries, get_dashboard_queries, no_store,
)
from dashboard.schemas.dashboard import CardData, RevenueRecord
from dashboard.services.dashboard_data import DashboardQueries

router = APIRouter(
    prefix="/api/v1/dashboard", tags=["dashboard"],
    dependencies=[Depends(no_store)],
)


@router.get("/revenue", response_model=list[RevenueRecord])
async def revenue(
    queries: DashboardQueries = Depends(get_dashboard_queries),
):
    return await queries.fetch_revenue()


@router.get("/cards", response_model=CardData)
async def cards(
    queries: DashboardQueries = Depends(get_card_queries),
):
    return await queries.fetch_card_data()
