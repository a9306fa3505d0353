"""Note domain models."""

from datetime import date
from pathlib import Path
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict

from postnotes.errors import LinkRewriteError

OUTPUT_SUFFIX = ".html"


def normalize_tag(tag: str) -> str:
    """Normalize a tag to its trimmed, lowercase form."""
    return tag.strip().lower()


def tag_segments(tag: str) -> list[str]:
    """Split a tag path like ``projects/web`` into normalized segments.

    Empty segments are dropped, so ``"  A/B/ "`` gives ``["a", "b"]``.
    """
    segments = (normalize_tag(part) for part in tag.split("/"))
    return [segment for segment in segments if segment]


def to_internal_link(target: str) -> str:
    """Turn a raw wikilink target into a canonical internal link.

    Leading path separators are stripped and the output suffix is inserted
    once, right before any query or fragment, which is kept verbatim.
    Rewriting an already canonical link returns it unchanged.

    Args:
        target: Raw link target, e.g. ``notes/foo#section``

    Returns:
        Canonical link, e.g. ``notes/foo.html#section``

    Raises:
        LinkRewriteError: If the target has no path part.
    """
    cut = min((i for i in (target.find("#"), target.find("?")) if i != -1), default=len(target))
    path_part, rest = target[:cut], target[cut:]

    path_part = path_part.lstrip("/")
    if not path_part.strip():
        raise LinkRewriteError(f"Link target {target!r} has no path to link to")

    if not path_part.endswith(OUTPUT_SUFFIX):
        path_part += OUTPUT_SUFFIX

    return path_part + rest


def internal_link_from_path(path: Path) -> str:
    """Canonical link of the page generated for a note file."""
    try:
        return path.with_suffix(OUTPUT_SUFFIX).name
    except ValueError as err:
        raise LinkRewriteError(f"Could not determine file name of {path}", path) from err


def _date_to_str(value: Any) -> Any:
    # Dates built in code rather than read from front matter
    if isinstance(value, date):
        return str(value)
    return value


Tag = Annotated[str, AfterValidator(normalize_tag)]
InternalLink = Annotated[str, AfterValidator(to_internal_link)]
# Page of a note itself, taken verbatim from its file name
PageLink = str
MediaLink = str
DateString = Annotated[str, BeforeValidator(_date_to_str)]


class Properties(BaseModel):
    """Front matter of a note.

    Attributes:
        title: Page title
        description: Short summary used by the search index
        image: Optional preview image
        tags: Normalized hierarchical tags, e.g. ``projects/web``
        created: Creation date as written in the front matter
        modified: Optional modification date
        public: Whether the note is published at all
    """

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    image: str | None = None
    tags: list[Tag]
    created: DateString
    modified: DateString | None = None
    public: bool


class Note(BaseModel):
    """A fully processed public note, ready to be rendered.

    Attributes:
        link: Canonical link of the note's own page
        properties: Validated front matter
        internal_links: Outgoing wikilinks in document order, duplicates kept
        media_links: Embedded media paths in order of appearance
        html_content: Rendered body
    """

    model_config = ConfigDict(frozen=True)

    link: PageLink
    properties: Properties
    internal_links: list[InternalLink] = []
    media_links: list[MediaLink] = []
    html_content: str = ""


class NoteEntry(BaseModel):
    """Outcome of transforming one note file: public with a note, or private."""

    model_config = ConfigDict(frozen=True)

    note: Note | None = None

    @classmethod
    def public(cls, note: Note) -> "NoteEntry":
        return cls(note=note)

    @classmethod
    def private(cls) -> "NoteEntry":
        return cls()

    @property
    def is_public(self) -> bool:
        return self.note is not None
