"""Invoice Routes — form mutations that redirect, and invoice read endpoints.

Invariants:
    - Mutations answer 303 See Other to the invoice listing path on success
    - Invalid form input → 400 before any write (pydantic.ValidationError)
    - GET /{invoice_id} → 404 when the invoice does not exist

Design Decisions:
    - Form fields read with request.form() and handed to the service unparsed,
      so create and update share one validation path (InvoiceForm)
    - /pages and /latest declared before /{invoice_id}
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import RedirectResponse

from dashboard.api.dependencies import (
    get_dashboard_queries, get_invoice_actions, no_store,
)
from dashboard.config import Settings, get_settings
from dashboard.core.errors import ErrorContext, ResourceNotFoundError
from dashboard.schemas.invoice import (
    InvoiceDetail, InvoicePages, InvoiceTableRow, LatestInvoice,
)
from dashboard.services.dashboard_data import DashboardQueries
from dashboard.services.invoice_actions import InvoiceActions

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/invoices", tags=["invoices"])


@router.post("", status_code=status.HTTP_303_SEE_OTHER)
async def create_invoice(
    request: Request,
    actions: InvoiceActions = Depends(get_invoice_actions),
    settings: Settings = Depends(get_settings),
):
    """Create an invoice from form fields, then redirect to the listing."""
    form = await request.form()
    await actions.create_invoice(form)
    return RedirectResponse(
        settings.invoices_path, status_code=status.HTTP_303_SEE_OTHER,
    )


@router.post("/{invoice_id}", status_code=status.HTTP_303_SEE_OTHER)
async def update_invoice(
    invoice_id: UUID,
    request: Request,
    actions: InvoiceActions = Depends(get_invoice_actions),
    settings: Settings = Depends(get_settings),
):
    """Update an invoice from form fields, then redirect to the listing."""
    form = await request.form()
    await actions.update_invoice(invoice_id, form)
    return RedirectResponse(
        settings.invoices_path, status_code=status.HTTP_303_SEE_OTHER,
    )


@router.get(
    "", response_model=list[InvoiceTableRow], dependencies=[Depends(no_store)],
)
async def list_invoices(
    query: str = Query(""),
    page: int = Query(1, ge=1),
    queries: DashboardQueries = Depends(get_dashboard_queries),
):
    """One page of invoices matching query."""
    return await queries.fetch_filtered_invoices(query, page)


@router.get(
    "/pages", response_model=InvoicePages, dependencies=[Depends(no_store)],
)
async def count_invoice_pages(
    query: str = Query(""),
    queries: DashboardQueries = Depends(get_dashboard_queries),
):
    """Total pages of invoices matching query."""
    return InvoicePages(total_pages=await queries.fetch_invoices_pages(query))


@router.get(
    "/latest", response_model=list[LatestInvoice], dependencies=[Depends(no_store)],
)
async def latest_invoices(
    queries: DashboardQueries = Depends(get_dashboard_queries),
):
    return await queries.fetch_latest_invoices()


@router.get(
    "/{invoice_id}", response_model=InvoiceDetail, dependencies=[Depends(no_store)],
)
async def get_invoice(
    invoice_id: UUID,
    queries: DashboardQueries = Depends(get_dashboard_queries),
):
    """Invoice for the edit form."""
    invoice = await queries.fetch_invoice_by_id(invoice_id)
    if invoice is None:
        raise ResourceNotFoundError(
            "Invoice", str(invoice_id), ErrorContext(invoice_id=str(invoice_id)),
        )
    return invoice
