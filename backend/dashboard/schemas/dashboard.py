"""Dashboard Schemas — revenue chart points and summary cards."""

from pydantic import BaseModel


class RevenueRecord(BaseModel):
    month: str
    revenue: int


class CardData(BaseModel):
    """Summary cards — computed per request, never persisted."""
    number_of_customers: int
    number_of_invoices: int
    total_paid_invoices: str
    total_pending_invoices: str
