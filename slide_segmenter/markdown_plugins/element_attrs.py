import re

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore

_ELEMENT_RE = re.compile(r'^<!--\s*\.element:\s*class="([^"]*)"\s*-->\s*$')


def element_attrs_plugin(md: MarkdownIt):
    """Markdown-it-py plugin that applies Reveal-style element annotations.

    A line ``<!-- .element: class="fragment fade-up" -->`` is parsed as an
    ``html_block``.  This core rule removes it and adds its classes to the
    block right before it (same nesting level), which is what Reveal.js does
    in the browser.  Tight-list paragraphs are not rendered, so their classes
    go to the enclosing list item instead.
    """

    def _opener(tokens, close_idx):
        close = tokens[close_idx]
        open_type = close.type.replace('_close', '_open')
        for idx in range(close_idx - 1, -1, -1):
            if tokens[idx].type == open_type and tokens[idx].level == close.level:
                return idx
        return None

    def _enclosing(tokens, idx):
        level = tokens[idx].level
        for j in range(idx - 1, -1, -1):
            if tokens[j].nesting == 1 and tokens[j].level < level:
                return j
        return None

    def _target(tokens, html_idx):
        level = tokens[html_idx].level
        for idx in range(html_idx - 1, -1, -1):
            token = tokens[idx]
            if token.level < level:
                # annotation is the first child: it belongs to its parent
                return idx if token.nesting == 1 else None
            if not token.block or token.level > level:
                continue
            if token.nesting == -1:
                idx = _opener(tokens, idx)
            if idx is not None and tokens[idx].hidden:
                idx = _enclosing(tokens, idx)
            return idx
        return None

    def _element_attrs(state: StateCore):
        tokens = state.tokens
        dropped = set()

        for idx, token in enumerate(tokens):
            if token.type != 'html_block':
                continue
            match = _ELEMENT_RE.match(token.content.strip())
            if not match:
                continue
            target = _target(tokens, idx)
            if target is None:
                continue
            for cls in match.group(1).split():
                tokens[target].attrJoin('class', cls)
            dropped.add(idx)

        if dropped:
            state.tokens = [token for idx, token in enumerate(tokens) if idx not in dropped]

    md.core.ruler.push('element_attrs', _element_attrs)
