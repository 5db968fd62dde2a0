"""Customer Schemas — customer list and customers-table rows."""

from pydantic import BaseModel


class CustomerRecord(BaseModel):
    id: str
    name: str
    email: str
    image_url: str


class CustomerTableRow(BaseModel):
    """Customer with invoice totals — totals formatted for display."""
    id: str
    name: str
    email: str
    image_url: str
    total_invoices: int
    total_pending: str
    total_paid: str
