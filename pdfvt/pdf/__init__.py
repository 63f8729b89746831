"""PDF generation management."""

import pydyf

from ..layout import PlacedImage, PlacedRule, TextLine, layout_blocks
from ..logger import PROGRESS_LOGGER
from .pdfvt import MetadataWriter
from .stream import FONTS, Stream


def _paint_page(page, stream):
    for fragment in page.fragments:
        if isinstance(fragment, TextLine):
            stream.show_line(*fragment)
        elif isinstance(fragment, PlacedImage):
            stream.draw_image(*fragment)
        elif isinstance(fragment, PlacedRule):
            stream.draw_rule(*fragment)


def _use_references(pdf, resources, images, compress):
    # Images
    for key, image in images.items():
        x_object = image.get_x_object(compress)
        pdf.add_object(x_object)
        resources['XObject'][key] = x_object.reference


def generate_pdf(document, **options):
    """Create :class:`pydyf.PDF` object for ``document``.

    Content is laid out and painted, then PDF/VT metadata is written in the
    same pass by :class:`MetadataWriter`.

    """
    profile = document.profile
    compress = not options['uncompressed_pdf']
    version = options['pdf_version'] or profile.pdf_version

    PROGRESS_LOGGER.info('Step 1 - Laying out content')
    image = document.get_image() if options['sample_image'] else None
    pages = layout_blocks(document.blocks(image))

    PROGRESS_LOGGER.info('Step 2 - Creating PDF')
    pdf = pydyf.PDF()
    pdf.version = str(version).encode()

    fonts = pydyf.Dictionary()
    for name, base_font in FONTS.values():
        font = pydyf.Dictionary({
            'Type': '/Font',
            'Subtype': '/Type1',
            'BaseFont': f'/{base_font}',
            'Encoding': '/WinAnsiEncoding',
        })
        pdf.add_object(font)
        fonts[name] = font.reference
    resources = pydyf.Dictionary({
        'Font': fonts,
        'XObject': pydyf.Dictionary(),
    })
    pdf.add_object(resources)

    images = {}
    for page in pages:
        stream = Stream(resources, images, compress=compress)
        _paint_page(page, stream)
        pdf.add_object(stream)
        pdf.add_page(pydyf.Dictionary({
            'Type': '/Page',
            'Parent': pdf.pages.reference,
            'MediaBox': pydyf.Array([0, 0, page.width, page.height]),
            'Contents': stream.reference,
            'Resources': resources.reference,
        }))
    _use_references(pdf, resources, images, compress)

    PROGRESS_LOGGER.info('Step 3 - Adding PDF/VT metadata')
    writer = MetadataWriter(document.registry)
    writer.write(pdf, profile, document.metadata, compress)

    return pdf
