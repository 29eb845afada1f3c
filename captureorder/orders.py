"""Order capture workflow.

    assign id/status/source -> insert into Mongo -> telemetry -> Event Hub

Only the Mongo insert can fail the request. Telemetry and the Event Hub
notification are optional side channels that log their own failures.
"""

from __future__ import annotations

from typing import Callable

from bson import ObjectId

from .config import Settings
from .eventhub import send_order_notification
from .models import ORDER_STATUS_OPEN, Order
from .mongo import insert_order
from .telemetry import track_order_captured

# Swagger UI fills string fields with this placeholder.
PLACEHOLDER_SOURCE = "string"


def prepare_order(order: Order, settings: Settings, order_id: str) -> Order:
    """Return a copy of `order` ready to be stored."""
    source = order.source
    if not source or source == PLACEHOLDER_SOURCE:
        source = settings.source
    return order.model_copy(
        update={"id": order_id, "status": ORDER_STATUS_OPEN, "source": source}
    )


def capture_order(
    order: Order,
    settings: Settings,
    collection,
    telemetry: Callable[[Settings, Order], bool] | None = None,
    notifier: Callable[[Settings, str], bool] | None = None,
) -> Order:
    """Store an order and fan out the optional notifications.

    Raises:
        pymongo.errors.PyMongoError if the order could not be stored. Nothing
        else is attempted in that case.
    """
    telemetry = telemetry or track_order_captured
    notifier = notifier or send_order_notification

    object_id = ObjectId()
    captured = prepare_order(order, settings, str(object_id))

    document = captured.model_dump()
    document["_id"] = object_id
    insert_order(collection, document)
    print(f"[Order] Captured order {captured.id} source={captured.source!r}")

    telemetry(settings, captured)

    if settings.event_url:
        notifier(settings, captured.id)

    return captured
