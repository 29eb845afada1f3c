"""Application Insights telemetry for captured orders.

Only active when `INSIGHTSKEY` is set. Telemetry is best effort: a failure
here is logged and never fails the order.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from applicationinsights import TelemetryClient

from .config import Settings
from .models import Order


def track_order_captured(
    settings: Settings,
    order: Order,
    client_factory: Callable[[str], TelemetryClient] = TelemetryClient,
) -> bool:
    """Send a "Capture Order" event plus a trace with the capture time.

    Returns:
        True if telemetry was sent, False if disabled or it failed.
    """
    if not settings.insights_key:
        return False

    try:
        client = client_factory(settings.insights_key)
        client.track_event(f"Capture Order {order.source}: {order.id}")
        client.track_trace(datetime.now(timezone.utc).isoformat())
        client.flush()
    except Exception as e:
        print(f"[Telemetry] Failed to track order {order.id}: {e}")
        return False

    print(f"[Telemetry] Tracked order {order.id}")
    return True
