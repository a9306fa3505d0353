"""Transformation of a single raw note into a rendered Note."""

from pathlib import Path

from loguru import logger
from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode
from mdit_py_plugins.dollarmath import dollarmath_plugin
from mdit_py_plugins.front_matter import front_matter_plugin

from postnotes.domain.note import (
    InternalLink,
    Note,
    NoteEntry,
    Properties,
    internal_link_from_path,
    to_internal_link,
)
from postnotes.errors import LinkRewriteError, MetadataError, SerializationError

from .media import preprocess_media_links
from .metadata import parse_properties
from .wikilinks import wikilinks_plugin


def create_markdown_parser() -> MarkdownIt:
    """CommonMark parser with tables, dollar math, front matter and wikilinks."""
    return (
        MarkdownIt("commonmark", {"html": False})
        .enable("table")
        .use(front_matter_plugin)
        .use(dollarmath_plugin)
        .use(wikilinks_plugin)
    )


class DocumentTransformer:
    """Turns raw note text into a public Note or a private entry."""

    def __init__(
        self,
        *,
        media_prefix: str = "media/",
        redaction_marker: str = "Questions",
        public_field: str = "public",
    ):
        """Initialize the transformer.

        Args:
            media_prefix: Folder prefix of embedded media, e.g. ``media/``
            redaction_marker: Text of the level-2 heading from which on
                everything is left out of the output
            public_field: Front matter key holding the public flag
        """
        self.media_prefix = media_prefix
        self.redaction_marker = redaction_marker
        self.public_field = public_field
        self.md = create_markdown_parser()

    def transform(self, path: Path, raw_md: str) -> NoteEntry:
        """Transform the raw text of a note file.

        Args:
            path: Path of the note file, used for the note's own link
            raw_md: Raw file content including front matter

        Returns:
            A public entry holding the Note, or a private entry.

        Raises:
            MetadataError: If the front matter is missing or invalid
            LinkRewriteError: If a link cannot be made canonical
            SerializationError: If the HTML cannot be rendered
        """
        preprocessed_md, media_links = preprocess_media_links(raw_md, prefix=self.media_prefix)

        env: dict = {}
        root = SyntaxTreeNode(self.md.parse(preprocessed_md, env))

        properties: Properties | None = None
        internal_links: list[InternalLink] = []

        for node in list(root.walk()):
            if node.type == "front_matter":
                properties = parse_properties(node.content, public_field=self.public_field)
                if properties is None:
                    logger.debug(f"{path} is private, skipping the rest of the note")
                    return NoteEntry.private()

            elif node.type == "wikilink":
                internal_links.append(self._rewrite_wikilink(node, path))

            elif self._is_redaction_heading(node):
                self._redact_from(node)
                break

        if properties is None:
            raise MetadataError("Could not determine properties, no front matter found", path)

        try:
            html = self.md.renderer.render(root.to_tokens(), self.md.options, env)
        except Exception as err:
            raise SerializationError(f"Could not render HTML: {err}", path) from err

        note = Note(
            link=internal_link_from_path(path),
            properties=properties,
            internal_links=internal_links,
            media_links=media_links,
            html_content=html.strip(),
        )
        return NoteEntry.public(note)

    @staticmethod
    def _rewrite_wikilink(node: SyntaxTreeNode, path: Path) -> InternalLink:
        """Point a wikilink node at its canonical link and return the link."""
        token = node.token
        assert token is not None

        target = token.meta.get("target", "")
        try:
            internal_link = to_internal_link(target)
        except LinkRewriteError as err:
            raise LinkRewriteError(str(err), path) from err

        token.attrSet("href", internal_link)
        logger.debug(f"Rewrote wikilink {target!r} -> {internal_link!r} in {path}")
        return internal_link

    def _is_redaction_heading(self, node: SyntaxTreeNode) -> bool:
        if node.type != "heading" or node.tag != "h2" or not node.children:
            return False

        inline = node.children[0]
        if not inline.children:
            return False

        first = inline.children[0]
        return first.type == "text" and first.content == self.redaction_marker

    @staticmethod
    def _redact_from(heading: SyntaxTreeNode) -> None:
        """Drop the heading, its preceding sibling and everything after it.

        When the heading is nested (e.g. in a blockquote) the blocks following
        each of its ancestors are dropped too, so nothing after the heading
        reaches the output.
        """
        parent = heading.parent
        assert parent is not None

        index = _child_index(parent, heading)
        parent.children = parent.children[: max(index - 1, 0)]

        node = parent
        while node.parent is not None:
            index = _child_index(node.parent, node)
            node.parent.children = node.parent.children[: index + 1]
            node = node.parent


def _child_index(parent: SyntaxTreeNode, child: SyntaxTreeNode) -> int:
    return next(i for i, sibling in enumerate(parent.children) if sibling is child)
