"""Reviewer endpoints. Callers are authenticated upstream; nothing here checks roles."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_lifecycle, get_store, get_threads
from api.serializers import app_to_response, message_to_response
from schemas.application import StatusUpdate
from schemas.message import AdminMessageCreate
from services.application_store import ApplicationStore
from services.lifecycle import LifecycleManager
from services.threads import MessageThreadManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/applications", tags=["admin"])


@router.get("")
async def list_applications(store: ApplicationStore = Depends(get_store)):
    apps = await store.list_all()
    return [app_to_response(a) for a in apps]


@router.put("/{application_id}/status")
async def update_status(
    application_id: str,
    body: StatusUpdate,
    lifecycle: LifecycleManager = Depends(get_lifecycle),
):
    app = await lifecycle.apply_status(application_id, body.status)
    logger.info(
        "Status updated: %s -> %s",
        application_id,
        app.status,
        extra={"application_id": application_id, "status": app.status},
    )
    return {"success": True, "application": app_to_response(app)}


@router.post("/{application_id}/messages", status_code=201)
async def post_admin_message(
    application_id: str,
    body: AdminMessageCreate,
    threads: MessageThreadManager = Depends(get_threads),
):
    message = await threads.append_admin_message(application_id, body.message)
    logger.info(
        "Message added to %s (admin)",
        application_id,
        extra={"application_id": application_id, "author": "admin"},
    )
    return {"success": True, "message": message_to_response(message)}
