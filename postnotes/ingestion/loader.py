"""Parallel loading of a folder of notes into a corpus."""

from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from loguru import logger
from pydantic import BaseModel

from postnotes.domain.note import Note, NoteEntry
from postnotes.errors import IoError, TransformError

from .transformer import DocumentTransformer

NOTE_SUFFIX = ".md"


class NoteFailure(BaseModel):
    """A note file that was skipped because it could not be read or transformed."""

    path: str
    error: str


class CorpusLoadResult(BaseModel):
    """Outcome of loading a folder of notes.

    Attributes:
        notes: The public notes, in no particular order
        private: Paths of the notes skipped because they are private
        failures: Notes skipped because of an error
    """

    notes: list[Note] = []
    private: list[str] = []
    failures: list[NoteFailure] = []


class CorpusLoader:
    """Reads and transforms every note of a folder on a worker pool."""

    def __init__(self, *, transformer: DocumentTransformer, max_workers: int | None = None):
        """Initialize the loader.

        Args:
            transformer: Transformer applied to every note
            max_workers: Size of the worker pool, None lets the executor decide
        """
        self.transformer = transformer
        self.max_workers = max_workers

    def load(self, folder: Path) -> CorpusLoadResult:
        """Load all notes of a folder.

        A note that cannot be read or transformed is logged and skipped, it
        never aborts the rest of the batch.

        Args:
            folder: Folder containing the markdown notes

        Returns:
            CorpusLoadResult with public notes, private paths and failures
        """
        files = self.discover(folder)
        logger.info(f"Found {len(files)} note files in {folder}")

        result = CorpusLoadResult()
        if not files:
            return result

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_path = {executor.submit(self._load_file, file): file for file in files}

            for future in as_completed(future_to_path):
                path = future_to_path[future]
                try:
                    entry = future.result()
                except (IoError, TransformError) as err:
                    logger.error(f"Something went wrong while parsing note {path}: {err}")
                    result.failures.append(NoteFailure(path=str(path), error=str(err)))
                    continue

                if entry.note is None:
                    logger.info(f"Skipping private note: {path}")
                    result.private.append(str(path))
                    continue

                logger.info(f"Loaded public note: {path}")
                result.notes.append(entry.note)

        logger.info(
            f"Loaded {len(result.notes)} public notes "
            f"({len(result.private)} private, {len(result.failures)} failed)"
        )
        return result

    def _load_file(self, file: Path) -> NoteEntry:
        try:
            raw_md = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as err:
            raise IoError(f"Could not read content of {file}: {err}") from err

        return self.transformer.transform(file, raw_md)

    @staticmethod
    def discover(folder: Path) -> list[Path]:
        """List the markdown note files directly inside a folder.

        Raises:
            IoError: If the folder cannot be listed
        """
        try:
            entries = list(folder.iterdir())
        except OSError as err:
            raise IoError(f"Could not list content folder {folder}: {err}") from err

        return sorted(entry for entry in entries if entry.is_file() and entry.suffix == NOTE_SUFFIX)
