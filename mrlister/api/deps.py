"""
Shared FastAPI dependencies: settings, storage backend and services.

``create_app`` puts the settings, the in-memory store and the schema
registry on ``app.state`` so each application instance has its own. The
SQL store is built per request around a unit-of-work session.
"""

from collections.abc import AsyncIterator

from fastapi import Depends, Request

from mrlister.config import Settings
from mrlister.core.interfaces import IInventoryStore
from mrlister.exporters.registry import SchemaRegistry
from mrlister.services.export_service import ExportService
from mrlister.services.intake_service import IntakeService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_store(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> AsyncIterator[IInventoryStore]:
    """Yield the configured inventory store for the duration of a request."""
    if not settings.uses_sql_storage:
        yield request.app.state.memory_store
        return

    from mrlister.db.database import session_scope
    from mrlister.storage.sql import SqlInventoryStore

    async with session_scope() as session:
        yield SqlInventoryStore(session)


def get_schema_registry(request: Request) -> SchemaRegistry:
    return request.app.state.schema_registry


def get_export_service(
    store: IInventoryStore = Depends(get_store),
    registry: SchemaRegistry = Depends(get_schema_registry),
) -> ExportService:
    return ExportService(store, registry)


def get_intake_service(
    store: IInventoryStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> IntakeService:
    return IntakeService.from_settings(store, settings)
