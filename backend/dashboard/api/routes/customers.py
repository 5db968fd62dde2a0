"""Customer Routes — customer list (invoice form options) and customers table."""

from fastapi import APIRouter, Depends, Query

from dashboard.api.dependencies import get_dashboard_queries, no_store
from dashboard.schemas.customer import CustomerRecord, CustomerTableRow
from dashboard.services.dashboard_data import DashboardQueries

router = APIRouter(
    prefix="/api/v1/customers", tags=["customers"],
    dependencies=[Depends(no_store)],
)


@router.get("", response_model=list[CustomerRecord])
async def list_customers(
    queries: DashboardQueries = Depends(get_dashboard_queries),
):
    return await queries.fetch_customers()


@router.get("/table", response_model=list[CustomerTableRow])
async def customers_table(
    query: str = Query(""),
    queries: DashboardQueries = Depends(get_dashboard_queries),
):
    """Customers matching query with their invoice totals."""
    return await queries.fetch_filtered_customers(query)
