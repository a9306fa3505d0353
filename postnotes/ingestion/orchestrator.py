"""Orchestration service for the complete build pipeline."""

from pathlib import Path

from loguru import logger
from pydantic import BaseModel

from postnotes.config import Settings
from postnotes.domain.content_map import ContentMap
from postnotes.domain.navigation import Navigation
from postnotes.domain.note import Note
from postnotes.errors import EmptyCorpusError
from postnotes.indexing import ContentMapBuilder, NavigationBuilder
from postnotes.site.builder import SiteBuilder

from .loader import CorpusLoader, NoteFailure
from .transformer import DocumentTransformer


class BuildResult(BaseModel):
    """Everything a build produces, handed to the rendering layer."""

    notes: list[Note]
    navigation: Navigation
    content_map: ContentMap
    failures: list[NoteFailure] = []

    def get_note(self, link: str) -> Note | None:
        for note in self.notes:
            if note.link == link:
                return note
        return None


class BuildOrchestrator:
    """Orchestrates the pipeline from a folder of raw notes to a written site."""

    def __init__(
        self,
        *,
        loader: CorpusLoader,
        site_builder: SiteBuilder | None = None,
    ):
        """Initialize the orchestrator.

        Args:
            loader: Loader producing the corpus of public notes
            site_builder: Writer for the output folder, None to only build in memory
        """
        self.loader = loader
        self.site_builder = site_builder
        self.content_map_builder = ContentMapBuilder()
        self.navigation_builder = NavigationBuilder()

    @classmethod
    def from_settings(cls, settings: Settings, *, write_site: bool = True) -> "BuildOrchestrator":
        transformer = DocumentTransformer(
            media_prefix=settings.media_prefix,
            redaction_marker=settings.redaction_marker,
            public_field=settings.public_field,
        )
        site_builder = None
        if write_site:
            site_builder = SiteBuilder(
                content_dir=settings.content_dir,
                output_dir=settings.output_dir,
                template_dir=settings.template_dir,
                static_dir=settings.static_dir,
                bundle_assets=settings.bundle_assets,
                render_pages=settings.render_pages,
            )
        return cls(
            loader=CorpusLoader(transformer=transformer, max_workers=settings.max_workers),
            site_builder=site_builder,
        )

    def build(self, content_dir: Path) -> BuildResult:
        """Load the notes of a folder, build both indexes and write the site.

        Args:
            content_dir: Folder containing the markdown notes

        Returns:
            BuildResult with the notes, navigation, content map and failures

        Raises:
            EmptyCorpusError: If no public note could be loaded
        """
        logger.info(f"=== Starting to load content from {content_dir}. ===")
        loaded = self.loader.load(content_dir)
        if not loaded.notes:
            raise EmptyCorpusError(f"No public notes could be loaded from {content_dir}")

        logger.info(f"=== Starting to generate content map with {len(loaded.notes)} entries. ===")
        content_map = self.content_map_builder.build(loaded.notes)

        logger.info("=== Starting to generate navigation. ===")
        navigation = self.navigation_builder.build(loaded.notes)

        result = BuildResult(
            notes=loaded.notes,
            navigation=navigation,
            content_map=content_map,
            failures=loaded.failures,
        )

        if self.site_builder is not None:
            logger.info("=== Starting to build website. ===")
            self.site_builder.build(
                notes=result.notes, navigation=result.navigation, content_map=result.content_map
            )

        logger.info("Build complete:")
        logger.info(f"  - Public notes: {len(loaded.notes)}")
        logger.info(f"  - Private notes: {len(loaded.private)}")
        logger.info(f"  - Failed notes: {len(loaded.failures)}")
        return result
