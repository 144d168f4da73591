"""Route de consultation des sources enregistrees."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter()


@router.get("/api/sources")
async def list_sources(request: Request):
    """Liste les sources dans l'ordre d'enregistrement avec leur etat."""
    registry = request.app.state.container.source_registry()
    sources = [
        {
            "id": source.id,
            "name": source.adapter.name,
            "kind": source.adapter.kind.value,
            "active": registry.is_active(source.id),
        }
        for source in registry.get_all_adapters()
    ]
    return JSONResponse(sources)
