"""Navigation domain models."""

from pydantic import BaseModel, ConfigDict

from postnotes.domain.note import PageLink, Tag

ROOT_TAG = "#"


class TagNode(BaseModel):
    """One level of the tag hierarchy.

    Attributes:
        tag: Tag segment of this level
        child_tags: Child levels, sorted by tag
        files: Links of the notes whose tag path ends here, sorted
    """

    model_config = ConfigDict(frozen=True)

    tag: Tag
    child_tags: list["TagNode"] = []
    files: list[PageLink] = []

    def child(self, tag: str) -> "TagNode | None":
        """Get the direct child with the given tag segment."""
        for child in self.child_tags:
            if child.tag == tag:
                return child
        return None


class Navigation(BaseModel):
    """The complete tag tree used to render the site navigation."""

    model_config = ConfigDict(frozen=True)

    root: TagNode = TagNode(tag=ROOT_TAG)
