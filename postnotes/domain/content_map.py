"""Search index domain models."""

from pydantic import BaseModel, ConfigDict, RootModel

from postnotes.domain.note import PageLink, Properties, Tag, tag_segments


class SearchEntry(BaseModel):
    """Public summary of a note, as exposed to the search index."""

    model_config = ConfigDict(frozen=True)

    tags: list[Tag]
    title: str
    description: str

    @classmethod
    def from_properties(cls, properties: Properties) -> "SearchEntry":
        return cls(
            tags=properties.tags,
            title=properties.title,
            description=properties.description,
        )

    def matches(self, query: str = "", tag: str | None = None) -> bool:
        """Check whether the entry matches a text query and an optional tag.

        The query is matched case-insensitively against title and description.
        A tag matches the entry's own tags and any tag below them, so ``a``
        matches an entry tagged ``a/b``.
        """
        query = query.strip().lower()
        if query and query not in self.title.lower() and query not in self.description.lower():
            return False

        if tag is None:
            return True

        wanted = tag_segments(tag)
        return any(tag_segments(own)[: len(wanted)] == wanted for own in self.tags)


class ContentMap(RootModel[dict[PageLink, SearchEntry]]):
    """Maps every public note's link to its search entry."""

    root: dict[PageLink, SearchEntry] = {}

    def __len__(self) -> int:
        return len(self.root)

    def __contains__(self, link: object) -> bool:
        return link in self.root

    def __getitem__(self, link: str) -> SearchEntry:
        return self.root[link]

    def search(self, query: str = "", tag: str | None = None) -> dict[str, SearchEntry]:
        """Return the entries matching the query and tag, ordered by link."""
        return {
            link: entry
            for link, entry in sorted(self.root.items())
            if entry.matches(query=query, tag=tag)
        }

    def to_json(self) -> str:
        return self.model_dump_json()
