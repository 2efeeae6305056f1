import asyncio
import inspect

import pytest
from fastapi import HTTPException

from app.routers import auth
from app.services.exceptions import ConflictError, NotFoundError
from app.utils.router_helpers import handle_service_errors


def test_sync_handler_stays_sync():
    @handle_service_errors
    def lookup():
        raise NotFoundError("No such thing", error="Thing not found")

    assert not inspect.iscoroutinefunction(lookup)
    with pytest.raises(HTTPException) as exc_info:
        lookup()

    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == {"error": "Thing not found", "message": "No such thing"}


def test_async_handler_maps_errors():
    @handle_service_errors
    async def book():
        raise ConflictError("Sold out", error="Insufficient tickets")

    assert inspect.iscoroutinefunction(book)
    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(book())

    assert exc_info.value.status_code == 409


def test_unexpected_error_becomes_500():
    @handle_service_errors
    def explode():
        raise RuntimeError("boom")

    with pytest.raises(HTTPException) as exc_info:
        explode()

    assert exc_info.value.status_code == 500
    assert exc_info.value.detail["message"] == "An unexpected error occurred"


def test_password_endpoints_run_off_the_event_loop():
    assert not inspect.iscoroutinefunction(auth.register_user)
    assert not inspect.iscoroutinefunction(auth.login_user)
