"""Invoice Schemas — form validation for mutations and shapes for invoice reads.

Invariants:
    - InvoiceForm requires customer_id, amount, status; id and date are never accepted
    - amount is coerced from its form string to Decimal; NaN/inf rejected
    - |amount| <= MAX_AMOUNT so its cents fit the 32-bit invoices.amount column
    - status must be a valid InvoiceStatus
    - Read shapes carry amounts either as raw cents (table), display strings
      (latest) or major units (detail)

Design Decisions:
    - One InvoiceForm for create and update: both forms submit the same three fields
    - customerId accepted as the form field name, customer_id as the Python name
"""

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from dashboard.core.domain_types import InvoiceStatus

# largest 32-bit signed integer, in major units
MAX_AMOUNT = Decimal("21474836.47")


class InvoiceForm(BaseModel):
    """Create/update invoice form — parsed from submitted form fields."""
    model_config = ConfigDict(populate_by_name=True)

    customer_id: UUID = Field(alias="customerId")
    amount: Decimal = Field(
        allow_inf_nan=False, ge=-MAX_AMOUNT, le=MAX_AMOUNT,
    )
    status: InvoiceStatus


class LatestInvoice(BaseModel):
    """Latest-invoices card row — amount already formatted for display."""
    id: str
    name: str
    email: str
    image_url: str
    amount: str


class InvoiceTableRow(BaseModel):
    """Invoices table row — invoice joined with its customer."""
    id: str
    customer_id: str
    amount: int
    status: str
    date: str
    name: str
    email: str
    image_url: str


class InvoiceDetail(BaseModel):
    """Invoice loaded into the edit form — amount in major units."""
    id: str
    customer_id: str
    amount: float
    status: InvoiceStatus


class InvoicePages(BaseModel):
    total_pages: int
