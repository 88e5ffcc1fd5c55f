"""Pydantic schemas for the stock query endpoint."""

from decimal import Decimal

from pydantic import BaseModel


class StockQuoteResponse(BaseModel):
    """Response schema for a single-symbol lookup."""

    symbol: str
    current_price: Decimal
    pe_ratio: Decimal
    earnings: Decimal


class ErrorResponse(BaseModel):
    """Response schema for application errors."""

    error: str
    message: str
