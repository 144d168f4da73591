"""
Point d'entree des messages envoyes par les pages (CHECK_MOVIE).

Le corps est transmis tel quel au BackgroundService : une requete
mal formee produit une reponse d'echec, jamais une erreur HTTP.
"""

import json

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ...adapters.messaging.channels import MESSAGES_PATH

router = APIRouter()


@router.post(MESSAGES_PATH)
async def post_message(request: Request):
    """Traite un message et retourne la reponse agregee."""
    background = request.app.state.container.background_service()
    try:
        message = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        message = None
    response = await background.handle_message(message)
    return JSONResponse(response)
