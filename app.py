import sys

from loguru import logger

from postnotes.api import create_app
from postnotes.config import settings
from postnotes.ingestion.orchestrator import BuildOrchestrator

logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])

logger.info(f"Building notes from {settings.content_dir} into {settings.output_dir}")
orchestrator = BuildOrchestrator.from_settings(settings)
result = orchestrator.build(settings.content_dir)
app = create_app(result=result, output_dir=settings.output_dir)
