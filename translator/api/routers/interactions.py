"""
Discord interactions endpoint.

Verifies request signatures, answers PINGs and acknowledges commands with a
deferred response while the translation runs in the background.
"""

import json
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from translator.api.deps import get_interaction_handler
from translator.core.config import settings
from translator.core.logging import get_logger, log_with_context
from translator.services.discord_commands import (
    CALLBACK_PONG,
    INTERACTION_APPLICATION_COMMAND,
    INTERACTION_PING,
)
from translator.services.interaction_handler import (
    InteractionHandler,
    deferred_response,
    parse_command,
)
from translator.services.signature import verify_signature

logger = get_logger(__name__)

router = APIRouter(tags=["Discord"])


@router.post("/interactions", summary="Discord interactions webhook")
async def handle_interaction(
    request: Request,
    background_tasks: BackgroundTasks,
    handler: InteractionHandler = Depends(get_interaction_handler),
):
    signature = request.headers.get("X-Signature-Ed25519")
    timestamp = request.headers.get("X-Signature-Timestamp")
    body = await request.body()

    if not signature or not timestamp:
        return Response(status_code=status.HTTP_400_BAD_REQUEST)

    if not verify_signature(settings.discord_public_key, signature, timestamp, body):
        log_with_context(
            logger,
            logging.WARNING,
            "Rejected interaction with invalid signature",
            signature_timestamp=timestamp,
            client=request.client.host if request.client else None,
        )
        return Response(content="invalid request signature", status_code=status.HTTP_401_UNAUTHORIZED)

    try:
        interaction = json.loads(body)
    except json.JSONDecodeError:
        return Response(status_code=status.HTTP_400_BAD_REQUEST)

    interaction_type = interaction.get("type")

    if interaction_type == INTERACTION_PING:
        return JSONResponse({"type": CALLBACK_PONG})

    if interaction_type == INTERACTION_APPLICATION_COMMAND:
        command = parse_command(interaction)
        if command is not None:
            logger.info(f"Processing {command.command}")
            background_tasks.add_task(handler.run, command)
            return JSONResponse(deferred_response(ephemeral=True))

    return Response(status_code=status.HTTP_404_NOT_FOUND)
