"""Run the service: `python -m captureorder`."""

from __future__ import annotations

import uvicorn

from .config import load_settings


def main() -> None:
    settings = load_settings()
    uvicorn.run("captureorder.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
