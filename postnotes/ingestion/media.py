"""Preprocessing of embedded media wikilinks."""

import re

from loguru import logger

from postnotes.domain.note import MediaLink


def media_embed_pattern(prefix: str) -> re.Pattern[str]:
    """Pattern for ``![[<prefix>path]]`` and ``![[<prefix>path|alt]]`` embeds."""
    return re.compile(rf"!\[\[({re.escape(prefix)}[^|\]]+)(?:\|([^\[\]]+))?\]\]")


def preprocess_media_links(raw_md: str, *, prefix: str = "media/") -> tuple[str, list[MediaLink]]:
    """Rewrite media embeds into standard markdown images.

    The markdown parser has no notion of ``![[...]]`` embeds, so they are
    turned into ``![alt](path)`` before parsing, with spaces in the path
    percent-encoded.

    Args:
        raw_md: Raw note text
        prefix: Reserved media folder prefix the embedded path must start with

    Returns:
        Tuple of (rewritten text, media links in order of appearance). If the
        pattern cannot be built, the text is returned untouched with no links.
    """
    try:
        pattern = media_embed_pattern(prefix)
    except re.error as err:
        logger.warning(f"Could not pre-process media wikilinks: {err}")
        return raw_md, []

    media_links: list[MediaLink] = []

    def replace_match(match: re.Match[str]) -> str:
        media_link = match.group(1)
        alt_text = match.group(2) or ""
        media_links.append(media_link)
        return f"![{alt_text}]({media_link.replace(' ', '%20')})"

    return pattern.sub(replace_match, raw_md), media_links
