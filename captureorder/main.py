"""captureorder FastAPI application.

Responsibilities:
- `POST /v1/order`: store an order, then optionally send telemetry and an
  Event Hub notification.
- `GET /healthz`: liveness probe.

Settings and the Mongo collection are created once on startup and kept on
`app.state`. Handlers get them through dependencies, which tests override.
"""

from __future__ import annotations

from fastapi import Depends, FastAPI, HTTPException, Request
from pymongo import errors

from .config import Settings, load_settings
from .models import Order, OrderCreatedResponse
from .mongo import get_collection
from .orders import capture_order

app = FastAPI(title="Capture Order")


@app.on_event("startup")
def on_startup() -> None:
    """Startup hook.

    - Read settings from the environment.
    - Connect to MongoDB (fails fast on missing database settings).
    """
    settings = load_settings()
    app.state.settings = settings
    app.state.collection = get_collection(settings)


def get_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        raise HTTPException(status_code=500, detail="Service is not configured")
    return settings


def get_order_collection(request: Request):
    collection = getattr(request.app.state, "collection", None)
    if collection is None:
        raise HTTPException(status_code=500, detail="Order store is not configured")
    return collection


@app.get("/healthz")
def healthz() -> dict[str, str]:
    """Basic liveness endpoint."""
    return {"response": "i'm alive!"}


@app.post("/v1/order", status_code=201, response_model=OrderCreatedResponse)
def post_order(
    order: Order,
    settings: Settings = Depends(get_settings),
    collection=Depends(get_order_collection),
):
    """Capture an order.

    Returns:
        {"orderId": "<24 hex chars>"}
    """
    if not order.emailAddress.strip():
        raise HTTPException(status_code=400, detail="emailAddress is required")

    try:
        captured = capture_order(order, settings, collection)
    except errors.PyMongoError as e:
        # 503: our storage dependency is unavailable, not a client error.
        raise HTTPException(status_code=503, detail=f"Failed to store order: {e}")

    return OrderCreatedResponse(orderId=captured.id)
