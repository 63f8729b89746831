"""Sample PDF/VT documents."""

import io
from datetime import datetime, timezone

from . import DEFAULT_OPTIONS, __version__
from .images import load_image, sample_image
from .layout import Figure, Paragraph, Rule
from .pdf import generate_pdf
from .pdf.pdfvt import REGISTRY

DARK = (33, 37, 41)
GREY = (108, 117, 125)
LIGHT_GREY = (206, 212, 218)
SLATE = (73, 80, 87)


class DocumentMetadata:
    """Meta-information belonging to a whole :class:`Document`.

    Written to the info dictionary and to the XMP metadata of the PDF.

    """
    def __init__(self, title=None, authors=None, description=None,
                 keywords=None, generator=None, created=None, modified=None):
        #: The title of the document, as a string or :obj:`None`.
        #: Written to the ``/Title`` info field and ``dc:title``.
        self.title = title
        #: The authors of the document, as a list of strings.
        #: Written to the ``/Author`` info field and ``dc:creator``.
        self.authors = authors or []
        #: The description of the document, as a string or :obj:`None`.
        #: Written to the ``/Subject`` info field and ``dc:description``.
        self.description = description
        #: Keywords associated with the document, as a list of strings.
        #: Written to the ``/Keywords`` info field and ``pdf:Keywords``.
        self.keywords = keywords or []
        #: The name of the software used to generate the document.
        #: Written to the ``/Creator`` info field and ``xmp:CreatorTool``.
        self.generator = generator
        #: The creation date of the document, as a W3C date string.
        self.created = created
        #: The modification date of the document, as a W3C date string.
        self.modified = modified

    @classmethod
    def from_profile(cls, profile, now=None):
        """Default metadata of a sample document following ``profile``."""
        now = now or datetime.now(timezone.utc)
        date = now.strftime('%Y-%m-%dT%H:%M:%SZ')
        return cls(
            title=f'{profile.marker} Sample Document',
            authors=['PDFVT Generator'],
            description=(
                f'Sample {profile.marker} document with text and image '
                f'content for variable data printing'),
            keywords=[profile.marker, 'Variable Data', 'Transactional Printing'],
            generator=f'pdfvt {__version__}',
            created=date, modified=date)


class Document:
    """A sample document following a PDF/VT variant.

    :param variant:
        A :class:`pdf.pdfvt.VersionProfile`, or the name (``'vt1'``) or
        marker (``'PDF/VT-1'``) of a registered profile.
    :type metadata: :class:`DocumentMetadata`
    :param metadata:
        Document metadata, defaults to metadata describing the variant.
    :param image:
        Filename or Pillow image embedded in the document, defaults to a
        generated geometric design.
    :param registry: Registry used to resolve ``variant``.

    """
    def __init__(self, variant, metadata=None, image=None, registry=REGISTRY):
        self.registry = registry
        #: The :class:`pdf.pdfvt.VersionProfile` followed by the document.
        self.profile = registry.resolve(variant)
        #: A :class:`DocumentMetadata` object.
        self.metadata = metadata or DocumentMetadata.from_profile(self.profile)
        self.image = image

    def get_image(self):
        if self.image is None:
            return sample_image()
        return load_image(self.image)

    def blocks(self, image=None, now=None):
        """Return the blocks of content of the document."""
        profile = self.profile
        now = now or datetime.now()
        blocks = [
            Paragraph(
                f'{profile.marker} Document Sample', 28, 'bold', DARK,
                'center', margin_bottom=30),
            Paragraph(
                'Variable Data & Transactional Printing', 16, 'regular', GREY,
                'center', margin_bottom=40),
            Paragraph(
                f'This document demonstrates {profile.marker} (Variable Data '
                'and Transactional Printing) capabilities. This version is '
                f'based on {profile.base_standard} and uses PDF '
                f'{profile.pdf_version} features.', 12, margin_bottom=20),
            Paragraph(
                f'Key Features of {profile.marker}:', 14, 'bold',
                margin_top=20, margin_bottom=10),
        ]
        for feature in profile.features:
            blocks.append(Paragraph(
                f'• {feature}', 11, 'regular', SLATE, margin_bottom=5,
                indent=20))
        if image is not None:
            blocks.append(Paragraph(
                'Sample Embedded Image', 14, 'bold', margin_top=30,
                margin_bottom=15))
            blocks.append(Figure(image, 300, 0, 15))
            blocks.append(Paragraph(
                'Figure 1: Geometric design sample demonstrating embedded '
                'image support', 10, 'italic', GREY, 'center',
                margin_bottom=20))
        blocks.append(Rule(LIGHT_GREY, 40, 20))
        blocks.append(Paragraph(
            f'Generated on {now:%B %d, %Y} at {now:%H:%M:%S}\n'
            f'Created with pdfvt {__version__} | {profile.marker} Compliant',
            9, 'regular', GREY, 'center'))
        return blocks

    def write_pdf(self, target=None, finisher=None, **options):
        """Paint the document in a PDF file, with PDF/VT metadata.

        :type target:
            :class:`str`, :class:`pathlib.Path` or :term:`file object`
        :param target:
            A filename where the PDF file is generated, a file object, or
            :obj:`None`.
        :type finisher: :term:`callable`
        :param finisher:
            A finisher function or callable that accepts the document and a
            :class:`pydyf.PDF` object as parameters. Can be passed to perform
            post-processing on the PDF right before the trailer is written.
        :param options:
            The ``options`` parameter includes by default the
            :data:`pdfvt.DEFAULT_OPTIONS` values.
        :returns:
            The PDF as :obj:`bytes` if ``target`` is not provided or
            :obj:`None`, otherwise :obj:`None` (the PDF is written to
            ``target``).

        """
        new_options = DEFAULT_OPTIONS.copy()
        new_options.update(options)
        options = new_options
        pdf = generate_pdf(self, **options)

        identifier = options['pdf_identifier'] or True
        if isinstance(identifier, str):
            identifier = identifier.encode()
        compress = not options['uncompressed_pdf']

        if finisher:
            finisher(self, pdf)

        if target is None:
            output = io.BytesIO()
            pdf.write(output, pdf.version, identifier, compress)
            return output.getvalue()

        if hasattr(target, 'write'):
            pdf.write(target, pdf.version, identifier, compress)
        else:
            with open(target, 'wb') as fd:
                pdf.write(fd, pdf.version, identifier, compress)
