"""
HTML preview and Reveal.js markup for segmented slides.

Neither function changes the slide tree: the preview renders each leaf's
markdown with markdown-it-py, the Reveal markup embeds the markdown as-is for
the Reveal markdown plugin to render in the browser.
"""
import logging
from typing import List, Optional, Sequence

from bs4 import BeautifulSoup
from markdown_it import MarkdownIt
from mdit_py_plugins.dollarmath import dollarmath_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from .markdown_plugins.element_attrs import element_attrs_plugin
from .models import ALIGN_CENTER, ALIGN_LEFT, SlideNode
from .navigation import flatten

logger = logging.getLogger(__name__)


class PreviewRenderer:
    """
    Render slide markdown to HTML for thumbnails and previews.
    """

    def __init__(self):
        self.markdown_processor = MarkdownIt('commonmark', {
            'html': True,          # fragment spans and sized <img> elements
        })

        # Enable additional features
        self.markdown_processor.enable(['table', 'strikethrough'])

        self.markdown_processor = (
            self.markdown_processor
                .use(dollarmath_plugin,
                     allow_space=False,                # Don't allow spaces after/before $
                     allow_digits=False,               # Don't allow digits before/after $
                     double_inline=False               # Don't allow $$ in inline context
                )
                .use(tasklists_plugin)                 # - [x] checkboxes
                .use(element_attrs_plugin)             # <!-- .element: class="…" -->
        )

    def render(self, slide: SlideNode) -> str:
        """
        Render one leaf slide to HTML (speaker notes excluded).

        Args:
            slide: Leaf node

        Returns:
            HTML string
        """
        if slide.is_stack():
            raise ValueError("Render the children of a stack, not the stack itself")
        return self.markdown_processor.render(slide.content)

    def render_deck(self, nodes: Sequence[SlideNode]) -> List[str]:
        """Render every leaf in display order, stacks flattened."""
        return [self.render(flat.slide) for flat in flatten(nodes)]

    def slide_title(self, slide: SlideNode) -> str:
        """Plain text of the first heading as rendered, or ``""``."""
        soup = BeautifulSoup(self.render(slide), 'html.parser')
        heading = soup.find(['h1', 'h2', 'h3', 'h4', 'h5', 'h6'])
        return heading.get_text(" ", strip=True) if heading else ""

    def outline(self, nodes: Sequence[SlideNode]) -> List[str]:
        return [self.slide_title(flat.slide) for flat in flatten(nodes)]


def _section_html(slide: SlideNode, global_alignment: str) -> str:
    left = slide.alignment == ALIGN_LEFT or global_alignment == ALIGN_LEFT
    class_attr = ' class="left-align"' if left else ''
    body = slide.content
    if slide.notes:
        body += f"\n\nNote:\n{slide.notes}"
    body = body.replace('</textarea>', '&lt;/textarea>')
    return f"""<section data-markdown{class_attr}>
<textarea data-template>
{body}
</textarea>
</section>"""


def generate_reveal_html(nodes: Sequence[SlideNode], global_alignment: Optional[str] = None) -> str:
    """
    Build Reveal.js ``<section>`` markup for a deck.

    Stacks become an outer ``<section>`` holding one inner section per child.
    Notes are appended after a ``Note:`` line, which the Reveal markdown
    plugin turns back into speaker notes.

    Args:
        nodes: Segmenter output
        global_alignment: Deck-wide alignment; ``left`` left-aligns every slide

    Returns:
        HTML fragment for ``<div class="slides">``
    """
    global_alignment = global_alignment or ALIGN_CENTER
    sections = []
    for node in nodes:
        if node.is_stack():
            inner = '\n'.join(_section_html(child, global_alignment) for child in node.children)
            sections.append(f"<section>\n{inner}\n</section>")
        else:
            sections.append(_section_html(node, global_alignment))
    logger.debug(f"Generated Reveal markup for {len(nodes)} slides")
    return '\n'.join(sections)


def render_slide(slide: SlideNode, renderer: PreviewRenderer = None) -> str:
    """
    Convenience function to render one slide to HTML.
    """
    renderer = renderer or PreviewRenderer()
    return renderer.render(slide)
