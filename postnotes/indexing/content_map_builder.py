"""Building the search index from processed notes."""

from typing import Iterable

from loguru import logger

from postnotes.domain.content_map import ContentMap, SearchEntry
from postnotes.domain.note import Note


class ContentMapBuilder:
    """Folds a corpus of notes into the link -> search entry map."""

    def build(self, notes: Iterable[Note]) -> ContentMap:
        entries: dict[str, SearchEntry] = {}

        for note in notes:
            entries[note.link] = SearchEntry.from_properties(note.properties)
            logger.debug(f"Generated map entry for {note.link}")

        return ContentMap(entries)
