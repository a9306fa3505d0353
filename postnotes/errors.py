"""Exceptions raised while turning notes into a site."""

from pathlib import Path


class PostNotesError(Exception):
    """Base exception for all post-notes failures."""


class TransformError(PostNotesError):
    """A single note could not be turned into a Note.

    Attributes:
        path: The note file the failure belongs to, when known.
    """

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = str(path) if path is not None else None

    def __str__(self) -> str:
        msg = super().__str__()
        if self.path:
            msg = f"{msg} (note: {self.path})"
        return msg


class MetadataError(TransformError):
    """The front matter block is missing, malformed or fails validation."""


class LinkRewriteError(TransformError):
    """A link target cannot be turned into a canonical internal link."""


class SerializationError(TransformError):
    """Encoding a note to HTML or an index to JSON failed."""


class IoError(PostNotesError):
    """Reading an input file or writing to the output location failed."""


class EmptyCorpusError(PostNotesError):
    """No public note survived loading."""
