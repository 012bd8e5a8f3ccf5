"""ASGI app for ``uvicorn central_publisher.main:app`` (install the ``server`` extra)."""

from __future__ import annotations

from central_publisher.factory import create_app

app = create_app()
