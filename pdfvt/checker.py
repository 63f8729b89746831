"""Check PDF/VT compliance of existing PDF files.

Only the identification requirements of ISO 16612-2 and ISO 16612-3 are
checked:

- ``GTS_PDFVTVersion`` in the document catalog (required),
- ``MarkInfo`` dictionary with ``Marked true`` (required),
- ``GTS_PDFVTVersion`` in XMP metadata (recommended),
- PDF version of the file, according to the detected variant.

Output intents, embedded fonts, color spaces and Document Part Metadata are
not validated.

"""

import errno
from pathlib import Path

import pikepdf

from .logger import LOGGER, PROGRESS_LOGGER
from .pdf.metadata import GTS_PDFVT_VERSION
from .pdf.pdfvt import REGISTRY, normalize_version
from .reader import PDFReader


class ComplianceResult:
    """Result of a PDF/VT compliance check.

    Results are filled by :meth:`ComplianceChecker.check` and are read-only
    once returned.

    """
    def __init__(self):
        #: Whether all the required checks pass.
        self.is_compliant = False
        #: The detected :class:`pdf.pdfvt.VersionProfile`, or :obj:`None`.
        self.detected_variant = None
        #: The PDF/VT marker as found in the document, even if unknown.
        self.raw_marker = None
        #: The PDF version declared by the document, as ``'major.minor'``.
        self.declared_pdf_version = None
        #: Whether ``GTS_PDFVTVersion`` is in the catalog.
        self.has_catalog_marker = False
        #: Whether XMP metadata includes ``GTS_PDFVTVersion`` and the marker.
        self.has_packet_marker = False
        #: Whether ``MarkInfo`` has ``Marked true``.
        self.has_structure_flag = False
        #: Human-readable descriptions of the problems found.
        self.issues = []
        self._frozen = False

    def __setattr__(self, name, value):
        if getattr(self, '_frozen', False):
            raise AttributeError(f'{type(self).__name__} is read-only')
        super().__setattr__(name, value)

    def __repr__(self):
        status = 'compliant' if self.is_compliant else 'not compliant'
        return f'<{type(self).__name__} {self.raw_marker} {status}>'

    def freeze(self):
        self.issues = tuple(self.issues)
        self._frozen = True

    def summary(self):
        """Return a human-readable report of the check."""
        def tick(value):
            return '✓' if value else '✗'

        lines = [
            'PDF/VT Compliance Check Results',
            f'   PDF Version: {self.declared_pdf_version}',
            f'   Detected: {self.raw_marker or "Not PDF/VT"}',
            f'   Compliant: {"✓ Yes" if self.is_compliant else "✗ No"}',
            '',
            '   Validation Details:',
            f'   ├─ GTS in Catalog: {tick(self.has_catalog_marker)}',
            f'   ├─ GTS in XMP:     {tick(self.has_packet_marker)}',
            f'   └─ MarkInfo:       {tick(self.has_structure_flag)}',
        ]
        if self.issues:
            lines.extend(('', '   Issues:'))
            lines.extend(f'   ⚠ {issue}' for issue in self.issues)
        return '\n'.join(lines)


class ComplianceChecker:
    """Check PDF files against the profiles of a registry.

    :type registry: :class:`pdf.pdfvt.ProfileRegistry`
    :param registry: The known PDF/VT profiles.

    """
    def __init__(self, registry=REGISTRY):
        self.registry = registry

    def check(self, filename):
        """Check compliance of the PDF file at ``filename``.

        Raise :exc:`FileNotFoundError` if the file doesn't exist. Problems
        found in existing files, including unreadable files, are stored in
        the issues of the returned :class:`ComplianceResult`.

        """
        path = Path(filename)
        if not path.exists():
            raise FileNotFoundError(
                errno.ENOENT, 'PDF file not found', str(filename))

        PROGRESS_LOGGER.info('Checking %s', path)
        result = ComplianceResult()
        try:
            with PDFReader.open(path) as reader:
                self._check_document(reader, result)
        except FileNotFoundError:
            raise
        except (pikepdf.PdfError, OSError, ValueError) as exception:
            LOGGER.warning('Unable to read %s: %s', path, exception)
            result.issues.append(f'Error reading PDF: {exception}')
            result.is_compliant = False
        result.freeze()
        return result

    def is_compliant(self, filename, expected_variant):
        """Whether the file is compliant and follows ``expected_variant``.

        ``expected_variant`` is a profile, or the name or the marker of a
        registered profile.

        """
        expected = self.registry.resolve(expected_variant)
        result = self.check(filename)
        return result.is_compliant and result.detected_variant is expected

    def _check_document(self, reader, result):
        declared_version = reader.declared_version
        result.declared_pdf_version = (
            normalize_version(declared_version) or declared_version)
        LOGGER.debug('Declared PDF version: %s', declared_version)

        marker = self._check_catalog(reader, result)
        self._check_structure(reader, result)
        marker = self._check_packet(reader, result, marker)

        if marker is None:
            result.issues.append('No PDF/VT version marker found')
            return
        result.raw_marker = marker

        profile = self.registry.by_marker(marker)
        if profile is None:
            result.issues.append(f'Unknown PDF/VT version: {marker}')
            return
        result.detected_variant = profile
        LOGGER.info('%s detected', profile.marker)

        mismatch = profile.pdf_version_rule.check(result.declared_pdf_version)
        if mismatch is not None:
            result.issues.append(f'{profile.marker} {mismatch}')
        result.is_compliant = (
            mismatch is None and
            result.has_catalog_marker and
            result.has_structure_flag)

    def _check_catalog(self, reader, result):
        marker = reader.catalog_string(GTS_PDFVT_VERSION)
        if marker is None:
            result.issues.append(f'{GTS_PDFVT_VERSION} not found in catalog')
        else:
            result.has_catalog_marker = True
            LOGGER.debug('Catalog marker: %s', marker)
        return marker

    def _check_structure(self, reader, result):
        result.has_structure_flag = reader.structure_flag is True
        if not result.has_structure_flag:
            result.issues.append('MarkInfo with Marked=true not found')

    def _check_packet(self, reader, result, marker):
        """Check XMP metadata, return the marker found in catalog or XMP."""
        packet = reader.metadata_packet
        if packet is None:
            result.issues.append('No XMP metadata packet found')
            return marker

        text = packet.decode('utf-8', errors='replace')
        if GTS_PDFVT_VERSION not in text:
            result.issues.append(
                f'{GTS_PDFVT_VERSION} not found in XMP metadata')
            return marker

        if marker is None:
            for profile in self.registry.detection_order():
                if profile.marker in text:
                    marker = profile.marker
                    LOGGER.debug('XMP marker: %s', marker)
                    break
        if marker is not None:
            result.has_packet_marker = marker in text
            if not result.has_packet_marker:
                result.issues.append(
                    f'{GTS_PDFVT_VERSION} in XMP metadata does not match '
                    f'{marker!r}')
        return marker


def check_compliance(filename, registry=REGISTRY):
    """Check compliance of ``filename`` with the default checker."""
    return ComplianceChecker(registry).check(filename)
