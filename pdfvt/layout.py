"""Lay out document blocks into pages.

Text uses the standard Helvetica fonts, whose glyph widths are estimated
from an average character width. Blocks are stacked from the top of the
page, and a new page is started when a line or an image doesn't fit.

"""

from collections import namedtuple

# A4 size in PDF points
A4 = (595.28, 841.89)
LINE_HEIGHT = 1.2

#: Average character width in em, for each font style.
CHARACTER_WIDTHS = {'regular': 0.5, 'bold': 0.55, 'italic': 0.5}

Paragraph = namedtuple(
    'Paragraph',
    'text, font_size, style, color, align, margin_top, margin_bottom, indent',
    defaults=(12, 'regular', (33, 37, 41), 'left', 0, 0, 0))
Figure = namedtuple('Figure', 'image, width, margin_top, margin_bottom')
Rule = namedtuple('Rule', 'color, margin_top, margin_bottom')

TextLine = namedtuple('TextLine', 'text, x, y, style, font_size, color')
PlacedImage = namedtuple('PlacedImage', 'image, x, y, width, height')
PlacedRule = namedtuple('PlacedRule', 'x1, x2, y, color')


def text_width(text, font_size, style='regular'):
    return len(text) * font_size * CHARACTER_WIDTHS[style]


def wrap_text(text, max_width, font_size, style='regular'):
    """Split text into lines fitting in ``max_width``.

    Explicit line breaks are kept, words longer than a line overflow.

    """
    lines = []
    for paragraph in text.split('\n'):
        line = ''
        for word in paragraph.split():
            candidate = f'{line} {word}' if line else word
            if line and text_width(candidate, font_size, style) > max_width:
                lines.append(line)
                line = word
            else:
                line = candidate
        lines.append(line)
    return lines


class Page:
    """Laid out page, with fragments positioned in PDF coordinates."""
    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.fragments = []


def layout_blocks(blocks, page_size=A4, margin=50):
    """Return a list of :class:`Page` objects for ``blocks``."""
    width, height = page_size
    content_width = width - 2 * margin
    pages = [Page(width, height)]
    top = height - margin

    def ensure_space(needed):
        nonlocal top
        if top - needed < margin and pages[-1].fragments:
            pages.append(Page(width, height))
            top = height - margin

    for block in blocks:
        top -= block.margin_top
        if isinstance(block, Paragraph):
            line_height = block.font_size * LINE_HEIGHT
            available_width = content_width - block.indent
            lines = wrap_text(
                block.text, available_width, block.font_size, block.style)
            for line in lines:
                ensure_space(line_height)
                x = margin + block.indent
                if block.align == 'center':
                    line_width = text_width(line, block.font_size, block.style)
                    x += max(0, (available_width - line_width) / 2)
                baseline = top - block.font_size
                pages[-1].fragments.append(TextLine(
                    line, x, baseline, block.style, block.font_size,
                    block.color))
                top -= line_height
        elif isinstance(block, Figure):
            figure_width = min(block.width, content_width)
            figure_height = figure_width * block.image.intrinsic_ratio
            ensure_space(figure_height)
            top -= figure_height
            x = margin + (content_width - figure_width) / 2
            pages[-1].fragments.append(PlacedImage(
                block.image, x, top, figure_width, figure_height))
        elif isinstance(block, Rule):
            ensure_space(1)
            pages[-1].fragments.append(
                PlacedRule(margin, width - margin, top, block.color))
            top -= 1
        else:
            raise TypeError(f'Layout for {type(block).__name__} not handled yet')
        top -= block.margin_bottom
    return pages
