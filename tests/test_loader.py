"""Tests for loading a folder of notes."""

from pathlib import Path

import pytest

from postnotes.errors import IoError
from postnotes.ingestion.loader import CorpusLoader
from postnotes.ingestion.transformer import DocumentTransformer


@pytest.fixture
def loader(transformer: DocumentTransformer) -> CorpusLoader:
    return CorpusLoader(transformer=transformer, max_workers=4)


def test_malformed_note_is_skipped(
    loader: CorpusLoader,
    notes_directory: Path,
    write_note,
    caplog: pytest.LogCaptureFixture,
) -> None:
    write_note("first.md", title="First")
    write_note("second.md", title="Second")
    broken = notes_directory / "broken.md"
    broken.write_text("---\ntitle: [unclosed\n---\nBody\n", encoding="utf-8")

    result = loader.load(notes_directory)

    assert sorted(note.link for note in result.notes) == ["first.html", "second.html"]
    assert len(result.failures) == 1
    assert result.failures[0].path == str(broken)

    errors = [record for record in caplog.records if record.levelname == "ERROR"]
    assert len(errors) == 1
    assert "broken.md" in errors[0].getMessage()


def test_private_notes_are_dropped(loader: CorpusLoader, notes_directory: Path, write_note) -> None:
    write_note("public.md", title="Public")
    private = write_note("private.md", title="Private", public=False)

    result = loader.load(notes_directory)

    assert [note.link for note in result.notes] == ["public.html"]
    assert result.private == [str(private)]
    assert result.failures == []


def test_only_markdown_files_directly_in_folder(
    loader: CorpusLoader, notes_directory: Path, write_note, media_directory: Path
) -> None:
    write_note("note.md")
    write_note("readme.txt")
    (media_directory / "cat.png").write_bytes(b"fake image")
    (media_directory / "nested.md").write_text("---\n---\n", encoding="utf-8")

    assert CorpusLoader.discover(notes_directory) == [notes_directory / "note.md"]
    assert [note.link for note in loader.load(notes_directory).notes] == ["note.html"]


def test_file_name_is_the_note_link(loader: CorpusLoader, notes_directory: Path, write_note) -> None:
    write_note("C# tips.md", title="C# Tips", tags=["code"])
    write_note("why?.md", title="Why")

    result = loader.load(notes_directory)

    assert sorted(note.link for note in result.notes) == ["C# tips.html", "why?.html"]
    assert result.failures == []


def test_unreadable_note_is_skipped(
    loader: CorpusLoader, notes_directory: Path, write_note
) -> None:
    write_note("good.md")
    bad = notes_directory / "bad.md"
    bad.write_bytes(b"---\ntitle: \xff\xfe\n---\n")

    result = loader.load(notes_directory)

    assert [note.link for note in result.notes] == ["good.html"]
    assert [failure.path for failure in result.failures] == [str(bad)]


def test_empty_folder(loader: CorpusLoader, notes_directory: Path) -> None:
    result = loader.load(notes_directory)

    assert result.notes == []
    assert result.failures == []


def test_missing_folder_raises(loader: CorpusLoader, temp_notes_base: Path) -> None:
    with pytest.raises(IoError):
        loader.load(temp_notes_base / "does-not-exist")


def test_single_worker_gives_same_notes(
    transformer: DocumentTransformer, notes_directory: Path, write_note
) -> None:
    for i in range(10):
        write_note(f"note-{i}.md", title=f"Note {i}", tags=[f"group/{i % 3}"])

    parallel = CorpusLoader(transformer=transformer, max_workers=4).load(notes_directory)
    sequential = CorpusLoader(transformer=transformer, max_workers=1).load(notes_directory)

    def by_link(notes):
        return sorted(notes, key=lambda note: note.link)

    assert by_link(parallel.notes) == by_link(sequential.notes)
    assert len(parallel.notes) == 10
