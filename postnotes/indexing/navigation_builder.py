"""Building the tag navigation tree from processed notes."""

from dataclasses import dataclass, field
from typing import Iterable

from loguru import logger

from postnotes.domain.navigation import ROOT_TAG, Navigation, TagNode
from postnotes.domain.note import Note, tag_segments


@dataclass
class _RawTagNode:
    """Mutable tree node used while the navigation is being built."""

    tag: str
    child_tags: dict[str, "_RawTagNode"] = field(default_factory=dict)
    files: set[str] = field(default_factory=set)

    def child(self, tag: str) -> "_RawTagNode":
        if tag not in self.child_tags:
            self.child_tags[tag] = _RawTagNode(tag=tag)
        return self.child_tags[tag]

    def freeze(self) -> TagNode:
        """Convert into a TagNode with children and files in sorted order."""
        return TagNode(
            tag=self.tag,
            child_tags=[self.child_tags[tag].freeze() for tag in sorted(self.child_tags)],
            files=sorted(self.files),
        )


class NavigationBuilder:
    """Folds a corpus of notes into the tag hierarchy."""

    def build(self, notes: Iterable[Note]) -> Navigation:
        """Build the navigation tree.

        Every tag of a note is split into its path segments and the note is
        attached to the deepest node of that path only, so a note tagged
        ``projects/web`` is listed under ``projects -> web`` but not directly
        under ``projects``.

        Args:
            notes: The public notes of the corpus

        Returns:
            Navigation whose children and files are sorted at every level
        """
        root = _RawTagNode(tag=ROOT_TAG)

        for note in notes:
            for tag in note.properties.tags:
                segments = tag_segments(tag)
                if not segments:
                    continue

                node = root
                for segment in segments:
                    node = node.child(segment)
                node.files.add(note.link)

                logger.debug(f"Inserted {note.link} under the tag {tag}")

        return Navigation(root=root.freeze())
