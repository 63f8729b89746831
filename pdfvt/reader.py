"""Read the parts of existing PDF files where PDF/VT evidence is stored."""

import contextlib

import pikepdf


class PDFReader:
    """Read-only access to the header, catalog and XMP metadata of a PDF.

    Get instances with :meth:`open`, that closes the file when leaving the
    ``with`` block.

    """
    def __init__(self, pdf):
        self._pdf = pdf

    @classmethod
    @contextlib.contextmanager
    def open(cls, filename):
        """Open PDF file, raise :exc:`pikepdf.PdfError` if it's unreadable."""
        with pikepdf.open(filename) as pdf:
            yield cls(pdf)

    @property
    def declared_version(self):
        """PDF version declared in the file header, as a string."""
        return self._pdf.pdf_version

    def catalog_string(self, key):
        """Get string value of catalog ``key``, or :obj:`None`."""
        value = self._pdf.Root.get(f'/{key}')
        if isinstance(value, pikepdf.String):
            return str(value)
        return None

    @property
    def structure_flag(self):
        """Value of ``/Marked`` in the catalog ``/MarkInfo``, or :obj:`None`."""
        mark_info = self._pdf.Root.get('/MarkInfo')
        if not isinstance(mark_info, pikepdf.Dictionary):
            return None
        marked = mark_info.get('/Marked')
        if isinstance(marked, bool):
            return marked
        return None

    @property
    def metadata_packet(self):
        """Decoded XMP metadata stream referenced by the catalog, or :obj:`None`."""
        metadata = self._pdf.Root.get('/Metadata')
        if not isinstance(metadata, pikepdf.Stream):
            return None
        return metadata.read_bytes()
