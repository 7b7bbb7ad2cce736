"""Typed payloads handed from bot components to the backend store."""

from __future__ import annotations

from typing import TypedDict


class NewProductRecord(TypedDict):
    """Row inserted into the products table."""

    name: str
    price: float
    description: str | None
    image_url: str


class OrderUpdateFields(TypedDict, total=False):
    """Partial order update.

    ``status`` is always present. ``tracking_number`` is only included when
    the command supplied one, so an existing value is never overwritten with
    nothing.
    """

    status: str
    tracking_number: str
