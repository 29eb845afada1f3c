"""Pydantic models for captureorder.

Older clients post orders with Go-style field names (`EmailAddress`,
`Product`, ...). Newer ones use camelCase. Both are accepted on input; we
always answer and store with camelCase.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

ORDER_STATUS_OPEN = "Open"


def _field(name: str, legacy: str, **kwargs: Any):
    return Field(validation_alias=AliasChoices(name, legacy), **kwargs)


class Order(BaseModel):
    """An order as received from a client and as stored in Mongo.

    Fields:
        id: Assigned by the service (ObjectId hex). Ignored on input.
        emailAddress: Customer email. Required.
        preferredLanguage: Customer language, free text.
        product: What was ordered.
        total: Order total.
        source: Channel the order came through (App Service, AKS, ...).
        status: Always reset to "Open" when the order is captured.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = _field("id", "ID", default="")
    emailAddress: str = _field("emailAddress", "EmailAddress")
    preferredLanguage: str = _field("preferredLanguage", "PreferredLanguage", default="")
    product: str = _field("product", "Product", default="")
    total: float = _field("total", "Total", default=0.0)
    source: str = _field("source", "Source", default="")
    status: str = _field("status", "Status", default="")


class OrderCreatedResponse(BaseModel):
    """Response body for `POST /v1/order`."""

    orderId: str


class OrderNotification(BaseModel):
    """Body POSTed to Event Hub after an order is stored."""

    order: str
    source: str
    time: str
    status: Literal["Open"] = ORDER_STATUS_OPEN
    hostname: str
