"""markdown-it plugin for ``[[target]]`` and ``[[target|title]]`` wikilinks."""

import re
from typing import Sequence

from markdown_it import MarkdownIt
from markdown_it.common.normalize_url import normalizeLink
from markdown_it.common.utils import escapeHtml
from markdown_it.rules_inline import StateInline
from markdown_it.token import Token
from markdown_it.utils import EnvType, OptionsDict

WIKILINK_PATTERN = re.compile(r"\[\[(?P<target>[^\[\]|]+)(?:\|(?P<title>[^\[\]]+))?\]\]")


def wikilinks_plugin(md: MarkdownIt) -> None:
    """Parse wikilinks into ``wikilink`` tokens, with the title after the pipe.

    The token keeps the raw target in ``meta["target"]`` and the link in its
    ``href`` attribute, so the href can be rewritten before rendering.
    """
    md.inline.ruler.before("link", "wikilink", _wikilink_rule)
    md.add_render_rule("wikilink", _render_wikilink)


def _wikilink_rule(state: StateInline, silent: bool) -> bool:
    if not state.src.startswith("[[", state.pos):
        return False

    match = WIKILINK_PATTERN.match(state.src, state.pos)
    if match is None:
        return False

    if not silent:
        target = match.group("target").strip()
        title = (match.group("title") or match.group("target")).strip()

        token = state.push("wikilink", "a", 0)
        token.attrSet("href", target)
        token.content = title
        token.markup = match.group(0)
        token.meta = {"target": target}

    state.pos = match.end()
    return True


def _render_wikilink(
    self,  # noqa: ARG001
    tokens: Sequence[Token],
    idx: int,
    options: OptionsDict,  # noqa: ARG001
    env: EnvType,  # noqa: ARG001
) -> str:
    token = tokens[idx]
    href = escapeHtml(normalizeLink(str(token.attrGet("href") or "")))
    return f'<a href="{href}" data-wikilink="true">{escapeHtml(token.content)}</a>'
