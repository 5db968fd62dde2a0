"""Invoice Actions — create_invoice, update_invoice.

Invariants:
    - Form data is validated by InvoiceForm before any persistence call
    - Persisted amount == form amount ×100 (integer cents)
    - create stamps the current UTC timestamp; update never touches id or date
    - Every successful write signals revalidation of the invoice listing path
    - Exactly one persistence write per call, no retry

Design Decisions:
    - pydantic.ValidationError is not caught: the global handler renders it
    - update uses a single UPDATE ... WHERE id = :id and checks rowcount,
      so a missing invoice is reported as ResourceNotFoundError (404)
    - SQLAlchemyError → InvoiceWriteError with a fixed message; detail goes to the log only
"""

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.core.currency import to_minor_units
from dashboard.core.domain_types import InvoiceId
from dashboard.core.errors import (
    ErrorContext, InvoiceWriteError, ResourceNotFoundError,
)
from dashboard.core.repository_protocols import PathRevalidator
from dashboard.models.invoice import Invoice
from dashboard.schemas.invoice import InvoiceForm

logger = logging.getLogger(__name__)

_FORM_FIELDS = ("customerId", "amount", "status")


def parse_invoice_form(form_data: Mapping[str, Any]) -> InvoiceForm:
    """Validate the submitted form fields. Raises pydantic.ValidationError."""
    return InvoiceForm.model_validate(
        {name: form_data.get(name) for name in _FORM_FIELDS},
    )


class InvoiceActions:
    """Invoice mutation handlers."""

    def __init__(
        self, db: AsyncSession, revalidator: PathRevalidator, invoices_path: str,
    ):
        self.db = db
        self.revalidator = revalidator
        self.invoices_path = invoices_path

    async def create_invoice(self, form_data: Mapping[str, Any]) -> InvoiceId:
        """Insert a new invoice from form data."""
        form = parse_invoice_form(form_data)
        invoice = Invoice(
            customer_id=form.customer_id,
            amount=to_minor_units(form.amount),
            status=form.status.value,
            date=datetime.now(timezone.utc).isoformat(),
        )
        try:
            self.db.add(invoice)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Database Error: {e}",
                extra={"operation": "create_invoice"}, exc_info=True,
            )
            raise InvoiceWriteError(
                "Failed to create invoice.",
                ErrorContext(operation="create_invoice"),
            )

        logger.info(
            "Invoice created",
            extra={"invoice_id": invoice.id, "customer_id": form.customer_id},
        )
        self.revalidator.revalidate_path(self.invoices_path)
        return InvoiceId(invoice.id)

    async def update_invoice(
        self, invoice_id: UUID, form_data: Mapping[str, Any],
    ) -> None:
        """Reassociate customer and overwrite amount/status of an existing invoice."""
        form = parse_invoice_form(form_data)
        try:
            result = await self.db.execute(
                update(Invoice)
                .where(Invoice.id == invoice_id)
                .values(
                    customer_id=form.customer_id,
                    amount=to_minor_units(form.amount),
                    status=form.status.value,
                ),
            )
            if result.rowcount == 0:
                await self.db.rollback()
                raise ResourceNotFoundError(
                    "Invoice", str(invoice_id),
                    ErrorContext(invoice_id=str(invoice_id), operation="update_invoice"),
                )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Database Error: {e}",
                extra={"operation": "update_invoice", "invoice_id": invoice_id},
                exc_info=True,
            )
            raise InvoiceWriteError(
                "Failed to update invoice.",
                ErrorContext(invoice_id=str(invoice_id), operation="update_invoice"),
            )

        logger.info("Invoice updated", extra={"invoice_id": invoice_id})
        self.revalidator.revalidate_path(self.invoices_path)
