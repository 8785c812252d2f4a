from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_generator, get_store, get_threads
from api.serializers import app_to_response, message_to_response
from schemas.application import ApplicationCreate
from schemas.message import MessageCreate
from services.application_store import ApplicationStore
from services.applications import create_application
from services.identifiers import IdentifierGenerator
from services.threads import MessageThreadManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/applications", tags=["applications"])


@router.post("", status_code=201)
async def submit_application(
    body: ApplicationCreate,
    store: ApplicationStore = Depends(get_store),
    generator: IdentifierGenerator = Depends(get_generator),
):
    app = await create_application(store, generator, body.model_dump(by_alias=False))
    logger.info("Application created: %s", app.application_id, extra={"application_id": app.application_id})
    return {
        "success": True,
        "applicationId": app.application_id,
        "message": "Credit application submitted",
    }


@router.get("/{application_id}")
async def get_application(application_id: str, store: ApplicationStore = Depends(get_store)):
    app = await store.find_by_id(application_id)
    return {"success": True, **app_to_response(app)}


@router.post("/{application_id}/messages", status_code=201)
async def post_user_message(
    application_id: str,
    body: MessageCreate,
    threads: MessageThreadManager = Depends(get_threads),
):
    message = await threads.append_user_message(application_id, body.message, claimed_author=body.from_)
    logger.info(
        "Message added to %s (user)",
        application_id,
        extra={"application_id": application_id, "author": "user"},
    )
    return {"success": True, "message": message_to_response(message)}


@router.get("/{application_id}/messages")
async def list_messages(application_id: str, threads: MessageThreadManager = Depends(get_threads)):
    messages = await threads.list_messages(application_id)
    return [message_to_response(m) for m in messages]
