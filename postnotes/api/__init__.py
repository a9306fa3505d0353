from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from loguru import logger

from postnotes.api.endpoints import get_endpoints_router
from postnotes.ingestion.orchestrator import BuildResult


def create_app(*, result: BuildResult, output_dir: Path | None = None) -> FastAPI:
    """Create FastAPI app serving a finished build."""
    app = FastAPI()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(router=get_endpoints_router(result=result))

    # Mounted last so the API routes take precedence over the site files
    if output_dir is not None:
        if output_dir.is_dir():
            app.mount("/", StaticFiles(directory=output_dir, html=True), name="site")
        else:
            logger.warning(f"Output folder {output_dir} does not exist, not serving pages")

    return app
