"""Writing a processed corpus to the output folder."""

import shutil
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, Template, TemplateError, select_autoescape
from loguru import logger

from postnotes.domain.content_map import ContentMap
from postnotes.domain.navigation import Navigation
from postnotes.domain.note import Note
from postnotes.errors import IoError, SerializationError

BASE_TEMPLATE = "base.html"
CONTENT_MAP_FILE = "map.json"


class SiteBuilder:
    """Copies assets, writes the search index and renders one page per note."""

    def __init__(
        self,
        *,
        content_dir: Path,
        output_dir: Path,
        template_dir: Path,
        static_dir: Path,
        bundle_assets: bool = True,
        render_pages: bool = True,
    ):
        """Initialize the site builder.

        Args:
            content_dir: Folder the notes (and their media) are read from
            output_dir: Folder the site is written to
            template_dir: Folder with the Jinja2 templates
            static_dir: Folder with static files copied verbatim
            bundle_assets: Copy static files and referenced media
            render_pages: Render a page per note
        """
        self.content_dir = Path(content_dir)
        self.output_dir = Path(output_dir)
        self.template_dir = Path(template_dir)
        self.static_dir = Path(static_dir)
        self.bundle_assets = bundle_assets
        self.render_pages = render_pages

    def build(self, *, notes: list[Note], navigation: Navigation, content_map: ContentMap) -> None:
        """Write the complete site.

        Raises:
            IoError: If the output folder or index cannot be written, or the
                page template cannot be loaded
            SerializationError: If the content map cannot be encoded
        """
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as err:
            raise IoError(f"Could not create output folder {self.output_dir}: {err}") from err

        if self.bundle_assets:
            self.copy_static_dir()
            self.copy_media_files(notes)

        self.write_content_map(content_map)

        if self.render_pages:
            self.render_notes(notes, navigation)

    def copy_static_dir(self) -> None:
        if not self.static_dir.is_dir():
            logger.warning(f"Static folder {self.static_dir} does not exist, skipping")
            return

        try:
            shutil.copytree(self.static_dir, self.output_dir, dirs_exist_ok=True)
        except (OSError, shutil.Error) as err:
            raise IoError(f"Could not copy static folder {self.static_dir}: {err}") from err

        logger.info(f"Copied static files from {self.static_dir}")

    def copy_media_files(self, notes: list[Note]) -> None:
        """Copy every referenced media file to the same relative path in the output.

        Missing files and links pointing outside the content or output folder
        are logged and skipped.
        """
        media_links = sorted({media_link for note in notes for media_link in note.media_links})
        content_root = self.content_dir.resolve()
        output_root = self.output_dir.resolve()

        for media_link in media_links:
            source = (content_root / media_link).resolve()
            destination = (output_root / media_link).resolve()
            if not source.is_relative_to(content_root) or not destination.is_relative_to(output_root):
                logger.warning(f"Media link {media_link} points outside the notes folder, skipping")
                continue

            try:
                destination.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(source, destination)
            except OSError as err:
                logger.warning(f"Could not copy file {source} into output folder: {err}")
                continue

            logger.debug(f"Copied media file {media_link}")

    def write_content_map(self, content_map: ContentMap) -> Path:
        try:
            map_json = content_map.to_json()
        except ValueError as err:
            raise SerializationError(f"Could not encode the content map: {err}") from err

        path = self.output_dir / CONTENT_MAP_FILE
        try:
            path.write_text(map_json, encoding="utf-8")
        except OSError as err:
            raise IoError(f"Could not write content map to {path}: {err}") from err

        logger.info(f"Created the content map at: {path}")
        return path

    def render_notes(self, notes: list[Note], navigation: Navigation) -> None:
        """Render a page per note; a page that fails to render is logged and skipped."""
        template = self._load_template()
        navigation_context = navigation.model_dump()

        for note in notes:
            try:
                content = template.render(note=note.model_dump(), navigation=navigation_context)
            except TemplateError as err:
                logger.error(f"Rendering failed for {note.link}: {err}")
                continue

            path = self.output_dir / note.link
            try:
                path.write_text(content, encoding="utf-8")
            except OSError as err:
                logger.error(f"Writing failed for {path}: {err}")
                continue

            logger.info(f"Rendered: {path}")

    def _load_template(self) -> Template:
        environment = Environment(
            loader=FileSystemLoader(self.template_dir),
            autoescape=select_autoescape(["html"]),
        )
        try:
            return environment.get_template(BASE_TEMPLATE)
        except TemplateError as err:
            raise IoError(f"Could not load template {BASE_TEMPLATE} from {self.template_dir}: {err}") from err
