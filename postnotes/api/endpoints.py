from fastapi import APIRouter, HTTPException
from loguru import logger

from postnotes.ingestion.orchestrator import BuildResult


def _create_note_endpoint(result: BuildResult):
    """Create the note lookup endpoint handler."""

    async def get_note(link: str):
        note = result.get_note(link)
        if note is None:
            logger.warning(f"Note not found: {link}")
            raise HTTPException(status_code=404, detail="Note not found")
        return note.model_dump()

    return get_note


def _create_search_endpoint(result: BuildResult):
    """Create the search endpoint handler."""

    async def search(q: str = "", tag: str | None = None):
        matches = result.content_map.search(query=q, tag=tag)
        logger.debug(f"Search q={q!r} tag={tag!r} matched {len(matches)} notes")
        return {link: entry.model_dump() for link, entry in matches.items()}

    return search


def get_endpoints_router(*, result: BuildResult) -> APIRouter:
    router = APIRouter()

    @router.get("/health")
    async def health_check():
        return {"status": "healthy", "notes": len(result.notes), "failures": len(result.failures)}

    @router.get("/api/map")
    async def content_map():
        return result.content_map.model_dump()

    @router.get("/api/navigation")
    async def navigation():
        return result.navigation.model_dump()

    router.get("/api/search")(_create_search_endpoint(result))
    router.get("/api/notes/{link:path}")(_create_note_endpoint(result))

    return router
