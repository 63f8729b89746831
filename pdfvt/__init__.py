"""Generate and check PDF/VT documents.

The public API is what is accessible from this "root" packages without
importing sub-modules.

"""

VERSION = __version__ = '1.0'

#: Default values for command-line and Python API options. See
#: :func:`__main__.main` to learn more about specific options for
#: command-line.
#:
#: :param bytes pdf_identifier:
#:     A bytestring used as PDF file identifier, a random identifier is
#:     generated if :obj:`None`.
#: :param str pdf_version:
#:     A PDF version number, overriding the version of the PDF/VT variant.
#: :param bool uncompressed_pdf:
#:     Whether PDF content should be compressed.
#: :param bool sample_image:
#:     Whether an image should be embedded in the document.
DEFAULT_OPTIONS = {
    'pdf_identifier': None,
    'pdf_version': None,
    'uncompressed_pdf': False,
    'sample_image': True,
}

__all__ = [
    'DEFAULT_OPTIONS', 'REGISTRY', 'VERSION', 'AtLeast', 'ComplianceChecker',
    'ComplianceResult', 'Document', 'DocumentMetadata', 'ExactlyEquals',
    'MetadataWriter', 'ProfileRegistry', 'VersionProfile', '__version__',
    'check_compliance']


# Import after setting the version, as the version is used in other modules
from .logger import LOGGER, PROGRESS_LOGGER  # noqa: I001, E402
from .pdf.pdfvt import (  # noqa: E402
    REGISTRY, AtLeast, ExactlyEquals, MetadataWriter, ProfileRegistry,
    VersionProfile)
from .document import Document, DocumentMetadata  # noqa: E402
from .checker import (  # noqa: E402
    ComplianceChecker, ComplianceResult, check_compliance)
