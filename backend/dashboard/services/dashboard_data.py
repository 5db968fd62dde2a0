"""Dashboard Data — read queries for revenue, cards, invoices and customers.

Invariants:
    - Every query failure is logged and re-raised as DataFetchError with a fixed message
    - fetch_invoice_by_id distinguishes "not found" (None) from "fetch failed" (DataFetchError)
    - fetch_filtered_invoices and fetch_invoices_pages share one substring predicate,
      so page contents and page counts always agree
    - fetch_card_data runs its four aggregates concurrently, one session each;
      each total is independent of completion order

Design Decisions:
    - Aggregates computed in SQL (COUNT/SUM) rather than by loading rows
    - Filtered invoices ordered by date desc (then id) so pages are stable
    - Customer table search is case-insensitive (icontains), invoice search uses
      the database's LIKE semantics (contains)
    - The revenue delay is a demo stub driven by settings, off by default
"""

import asyncio
import logging
from uuid import UUID

from sqlalchemy import Select, case, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dashboard.core.currency import format_currency, from_minor_units
from dashboard.core.domain_types import (
    ITEMS_PER_PAGE, LATEST_INVOICES_LIMIT, InvoiceStatus,
)
from dashboard.core.errors import DataFetchError, ErrorContext
from dashboard.core.pagination import page_offset, total_pages
from dashboard.models.customer import Customer
from dashboard.models.invoice import Invoice
from dashboard.models.revenue import Revenue
from dashboard.schemas.customer import CustomerRecord, CustomerTableRow
from dashboard.schemas.dashboard import CardData, RevenueRecord
from dashboard.schemas.invoice import InvoiceDetail, InvoiceTableRow, LatestInvoice

logger = logging.getLogger(__name__)


def invoice_search_clause(query: str):
    """Substring match on customer name, customer email or invoice status."""
    return or_(
        Customer.name.contains(query, autoescape=True),
        Customer.email.contains(query, autoescape=True),
        Invoice.status.contains(query, autoescape=True),
    )


def _fetch_failed(message: str, operation: str, error: Exception) -> DataFetchError:
    logger.error(
        f"Database Error: {error}",
        extra={"operation": operation}, exc_info=True,
    )
    return DataFetchError(message, ErrorContext(operation=operation))


class DashboardQueries:
    """Read handlers. Stateless apart from the injected session(s)."""

    def __init__(
        self,
        db: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        revenue_delay_seconds: float = 0.0,
    ):
        self.db = db
        self.session_factory = session_factory
        self.revenue_delay_seconds = revenue_delay_seconds

    async def fetch_revenue(self) -> list[RevenueRecord]:
        """All revenue rows, verbatim."""
        try:
            if self.revenue_delay_seconds > 0:
                logger.info("Fetching revenue data...")
                await asyncio.sleep(self.revenue_delay_seconds)
            result = await self.db.execute(select(Revenue))
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            raise _fetch_failed("Failed to fetch revenue data.", "fetch_revenue", e)
        return [RevenueRecord(month=r.month, revenue=r.revenue) for r in rows]

    async def fetch_latest_invoices(self) -> list[LatestInvoice]:
        """Five most recent invoices with customer details and formatted amount."""
        stmt = (
            select(
                Invoice.id, Invoice.amount,
                Customer.name, Customer.email, Customer.image_url,
            )
            .join(Invoice.customer)
            .order_by(Invoice.date.desc())
            .limit(LATEST_INVOICES_LIMIT)
        )
        try:
            rows = (await self.db.execute(stmt)).all()
        except SQLAlchemyError as e:
            raise _fetch_failed(
                "Failed to fetch the latest invoices.", "fetch_latest_invoices", e,
            )
        return [
            LatestInvoice(
                id=str(row.id),
                name=row.name,
                email=row.email,
                image_url=row.image_url,
                amount=format_currency(row.amount),
            )
            for row in rows
        ]

    async def fetch_card_data(self) -> CardData:
        """Customer/invoice counts and paid/pending totals, queried concurrently."""
        if self.session_factory is None:
            raise RuntimeError("fetch_card_data requires a session factory")

        paid_total = (
            select(func.coalesce(func.sum(Invoice.amount), 0))
            .where(Invoice.status == InvoiceStatus.PAID.value)
        )
        pending_total = (
            select(func.coalesce(func.sum(Invoice.amount), 0))
            .where(Invoice.status == InvoiceStatus.PENDING.value)
        )
        # first failure cancels the remaining aggregates
        try:
            async with asyncio.TaskGroup() as tg:
                customers = tg.create_task(
                    self._scalar(select(func.count()).select_from(Customer)),
                )
                invoices = tg.create_task(
                    self._scalar(select(func.count()).select_from(Invoice)),
                )
                paid = tg.create_task(self._scalar(paid_total))
                pending = tg.create_task(self._scalar(pending_total))
        except ExceptionGroup as eg:
            failed = eg.subgroup(SQLAlchemyError)
            if failed is None:
                raise
            raise _fetch_failed(
                "Failed to fetch card data.", "fetch_card_data", failed.exceptions[0],
            )

        return CardData(
            number_of_customers=customers.result(),
            number_of_invoices=invoices.result(),
            total_paid_invoices=format_currency(paid.result()),
            total_pending_invoices=format_currency(pending.result()),
        )

    async def _scalar(self, stmt: Select) -> int:
        # own session per query: an AsyncSession cannot run statements concurrently
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return int(result.scalar_one())

    async def fetch_filtered_invoices(
        self, query: str, current_page: int,
    ) -> list[InvoiceTableRow]:
        """One page (ITEMS_PER_PAGE rows) of invoices matching query."""
        stmt = (
            select(Invoice, Customer)
            .join(Invoice.customer)
            .where(invoice_search_clause(query))
            .order_by(Invoice.date.desc(), Invoice.id)
            .limit(ITEMS_PER_PAGE)
            .offset(page_offset(current_page))
        )
        try:
            rows = (await self.db.execute(stmt)).all()
        except SQLAlchemyError as e:
            raise _fetch_failed(
                "Failed to fetch invoices.", "fetch_filtered_invoices", e,
            )
        return [
            InvoiceTableRow(
                id=str(invoice.id),
                customer_id=str(invoice.customer_id),
                amount=invoice.amount,
                status=invoice.status,
                date=invoice.date,
                name=customer.name,
                email=customer.email,
                image_url=customer.image_url,
            )
            for invoice, customer in rows
        ]

    async def fetch_invoices_pages(self, query: str) -> int:
        """Total page count for invoices matching query."""
        stmt = (
            select(func.count(Invoice.id))
            .join(Invoice.customer)
            .where(invoice_search_clause(query))
        )
        try:
            count = (await self.db.execute(stmt)).scalar_one()
        except SQLAlchemyError as e:
            raise _fetch_failed(
                "Failed to fetch total number of invoices.", "fetch_invoices_pages", e,
            )
        return total_pages(count)

    async def fetch_invoice_by_id(self, invoice_id: UUID) -> InvoiceDetail | None:
        """Invoice for the edit form, amount in major units. None if absent."""
        try:
            result = await self.db.execute(
                select(Invoice).where(Invoice.id == invoice_id),
            )
            invoice = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise _fetch_failed("Failed to fetch invoice.", "fetch_invoice_by_id", e)

        if invoice is None:
            logger.info("Invoice not found", extra={"invoice_id": invoice_id})
            return None
        return InvoiceDetail(
            id=str(invoice.id),
            customer_id=str(invoice.customer_id),
            amount=from_minor_units(invoice.amount),
            status=InvoiceStatus(invoice.status),
        )

    async def fetch_customers(self) -> list[CustomerRecord]:
        try:
            result = await self.db.execute(
                select(Customer).order_by(Customer.name.asc()),
            )
            customers = result.scalars().all()
        except SQLAlchemyError as e:
            raise _fetch_failed("Failed to fetch all customers.", "fetch_customers", e)
        return [
            CustomerRecord(
                id=str(c.id), name=c.name, email=c.email, image_url=c.image_url,
            )
            for c in customers
        ]

    async def fetch_filtered_customers(self, query: str) -> list[CustomerTableRow]:
        """Customers matching query (name/email, case-insensitive) with invoice totals."""
        total_pending = func.coalesce(func.sum(case(
            (Invoice.status == InvoiceStatus.PENDING.value, Invoice.amount),
            else_=0,
        )), 0)
        total_paid = func.coalesce(func.sum(case(
            (Invoice.status == InvoiceStatus.PAID.value, Invoice.amount),
            else_=0,
        )), 0)
        stmt = (
            select(
                Customer.id, Customer.name, Customer.email, Customer.image_url,
                func.count(Invoice.id).label("total_invoices"),
                total_pending.label("total_pending"),
                total_paid.label("total_paid"),
            )
            .outerjoin(Invoice, Invoice.customer_id == Customer.id)
            .where(or_(
                Customer.name.icontains(query, autoescape=True),
                Customer.email.icontains(query, autoescape=True),
            ))
            .group_by(
                Customer.id, Customer.name, Customer.email, Customer.image_url,
            )
            .order_by(Customer.name.asc())
        )
        try:
            rows = (await self.db.execute(stmt)).all()
        except SQLAlchemyError as e:
            raise _fetch_failed(
                "Failed to fetch customer table.", "fetch_filtered_customers", e,
            )
        return [
            CustomerTableRow(
                id=str(row.id),
                name=row.name,
                email=row.email,
                image_url=row.image_url,
                total_invoices=row.total_invoices,
                total_pending=format_currency(row.total_pending),
                total_paid=format_currency(row.total_paid),
            )
            for row in rows
        ]
