"""Event Hub notification for captured orders.

After an order is stored we POST a small JSON document to the Event Hub REST
endpoint (`EVENTURL`). The request is authenticated with a SAS token built
from `EVENTPOLICYNAME` / `EVENTPOLICYKEY` (see `sas.py`).

Delivery is attempted once. Failures are logged and reported through the
return value; the order itself is already stored and stays captured.
"""

from __future__ import annotations

import socket
from datetime import datetime, timezone

import httpx

from .config import Settings
from .models import OrderNotification
from .sas import MISSING_PARAMETER, TokenSigner, create_shared_access_token


def build_notification(order_id: str, source: str) -> OrderNotification:
    """Describe a freshly captured order."""
    return OrderNotification(
        order=order_id,
        source=source,
        time=datetime.now(timezone.utc).isoformat(),
        hostname=socket.gethostname(),
    )


def send_order_notification(
    settings: Settings,
    order_id: str,
    signer: TokenSigner | None = None,
    client: httpx.Client | None = None,
) -> bool:
    """POST an order notification to Event Hub.

    Args:
        settings: Service settings (event URL, policy name and key, source).
        order_id: Id of the stored order.
        signer: Token signer; tests inject one with a fixed clock.
        client: httpx client to use. When None a short-lived one is created.

    Returns:
        True if Event Hub accepted the message (2xx), False otherwise.
    """
    if not settings.event_url:
        return False

    sign = signer.sign if signer is not None else create_shared_access_token
    token = sign(
        settings.event_url.strip(),
        settings.event_policy_name.strip(),
        settings.event_policy_key.strip(),
    )
    if token == MISSING_PARAMETER:
        print(f"[EventHub] Not sending order {order_id}: {token}")
        return False

    notification = build_notification(order_id, settings.source)
    headers = {"Authorization": token}

    try:
        if client is None:
            with httpx.Client(timeout=settings.http_timeout_seconds) as own_client:
                resp = own_client.post(
                    settings.event_url, json=notification.model_dump(), headers=headers
                )
        else:
            resp = client.post(
                settings.event_url, json=notification.model_dump(), headers=headers
            )
        resp.raise_for_status()
    except httpx.HTTPError as e:
        print(f"[EventHub] Delivery failed for order {order_id}: {e}")
        return False

    print(f"[EventHub] Delivered order {order_id} (status={resp.status_code})")
    return True
