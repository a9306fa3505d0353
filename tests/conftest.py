import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from loguru import logger

from postnotes.api import create_app
from postnotes.domain.note import Note, Properties
from postnotes.indexing import ContentMapBuilder, NavigationBuilder
from postnotes.ingestion.orchestrator import BuildResult
from postnotes.ingestion.transformer import DocumentTransformer

NoteTextFactory = Callable[..., str]
NoteWriter = Callable[..., Path]


@pytest.fixture
def caplog(caplog: pytest.LogCaptureFixture) -> Generator[pytest.LogCaptureFixture, None, None]:
    """Route loguru records into pytest's caplog."""
    handler_id = logger.add(
        caplog.handler,
        format="{message}",
        level=0,
        filter=lambda record: record["level"].no >= caplog.handler.level,
        enqueue=False,
    )
    yield caplog
    logger.remove(handler_id)


@pytest.fixture
def note_text() -> NoteTextFactory:
    """Build the raw text of a note with front matter."""

    def _note_text(
        body: str = "Some content.",
        *,
        title: str = "A Note",
        description: str = "A note for testing",
        tags: list[str] | None = None,
        public: bool = True,
        created: str = "2024-01-05",
        extra: str = "",
    ) -> str:
        tag_list = ", ".join(f'"{tag}"' for tag in (tags or []))
        return (
            "---\n"
            f"title: {title}\n"
            f"description: {description}\n"
            f"tags: [{tag_list}]\n"
            f"created: {created}\n"
            f"public: {'true' if public else 'false'}\n"
            f"{extra}"
            "---\n"
            f"{body}\n"
        )

    return _note_text


@pytest.fixture
def temp_notes_base() -> Generator[Path, None, None]:
    """Create a temporary base directory for notes and build output."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def notes_directory(temp_notes_base: Path) -> Path:
    """Create notes subdirectory."""
    notes_dir = temp_notes_base / "notes"
    notes_dir.mkdir()
    return notes_dir


@pytest.fixture
def media_directory(notes_directory: Path) -> Path:
    """Create the reserved media folder inside the notes directory."""
    media_dir = notes_directory / "media"
    media_dir.mkdir()
    return media_dir


@pytest.fixture
def write_note(notes_directory: Path, note_text: NoteTextFactory) -> NoteWriter:
    """Write a note with front matter into the notes directory."""

    def _write_note(name: str, body: str = "Some content.", **kwargs) -> Path:
        path = notes_directory / name
        path.write_text(note_text(body, **kwargs), encoding="utf-8")
        return path

    return _write_note


@pytest.fixture
def transformer() -> DocumentTransformer:
    return DocumentTransformer()


def make_note(link: str, *, title: str, tags: list[str], description: str = "") -> Note:
    return Note(
        link=link,
        properties=Properties(
            title=title,
            description=description or f"About {title}",
            tags=tags,
            created="2024-01-05",
            public=True,
        ),
        html_content=f"<p>{title}</p>",
    )


@pytest.fixture
def note_factory() -> Callable[..., Note]:
    """Build a public Note directly, without parsing."""
    return make_note


@pytest.fixture
def test_notes() -> list[Note]:
    return [
        make_note("web-basics.html", title="Web Basics", tags=["projects/web", "learning"]),
        make_note("rust-notes.html", title="Rust Notes", tags=["projects/rust"]),
        make_note("reading-list.html", title="Reading List", tags=["learning"]),
    ]


@pytest.fixture
def build_result(test_notes: list[Note]) -> BuildResult:
    return BuildResult(
        notes=test_notes,
        navigation=NavigationBuilder().build(test_notes),
        content_map=ContentMapBuilder().build(test_notes),
    )


@pytest.fixture
def test_client(build_result: BuildResult) -> TestClient:
    """Create test client over an in-memory build."""
    return TestClient(create_app(result=build_result))
