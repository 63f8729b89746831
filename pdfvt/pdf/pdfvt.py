"""PDF/VT profiles and generation.

PDF/VT documents carry their version marker in three places: the
``GTS_PDFVTVersion`` key of the catalog, the ``MarkInfo`` dictionary of the
catalog, and the XMP metadata stream. Each supported variant is described by
a :class:`VersionProfile`, and all the profiles are stored in an immutable
:class:`ProfileRegistry`.

"""

import re
from collections import namedtuple
from types import MappingProxyType

import pydyf

from .. import __version__
from ..logger import LOGGER
from .metadata import (
    GTS_PDFVT_VERSION, NS, add_metadata, generate_rdf_metadata, w3c_date_to_pdf)

VERSION_RE = re.compile(r'^\s*(\d+)\.(\d+)')


def parse_version(version):
    """Return ``(major, minor)`` integers of a PDF version, or :obj:`None`."""
    if version is None:
        return None
    match = VERSION_RE.match(str(version))
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


def normalize_version(version):
    """Return PDF version as a ``'major.minor'`` string, or :obj:`None`."""
    parsed = parse_version(version)
    if parsed is None:
        return None
    return '{}.{}'.format(*parsed)


class VersionRule:
    """Base of the PDF version rules followed by profiles."""
    __slots__ = ()

    def check(self, version):
        """Return :obj:`None` if ``version`` is accepted, or a message."""
        if self.accepts(version):
            return None
        return f'requires PDF {self}, found {version}'


class AtLeast(VersionRule, namedtuple('AtLeast', 'major, minor')):
    """PDF version rule satisfied by a minimal version or any later one."""
    __slots__ = ()

    def __str__(self):
        return f'{self.major}.{self.minor}+'

    def accepts(self, version):
        parsed = parse_version(version)
        return parsed is not None and parsed >= (self.major, self.minor)


class ExactlyEquals(VersionRule, namedtuple('ExactlyEquals', 'version')):
    """PDF version rule satisfied by one version only."""
    __slots__ = ()

    def __str__(self):
        return self.version

    def accepts(self, version):
        return version == self.version


class VersionProfile(namedtuple('VersionProfile', (
        'name, marker, pdf_version, pdf_version_rule, base_standard, '
        'features, extra_metadata_namespaces'))):
    """Identifiers and requirements of one PDF/VT variant.

    Profiles are read-only, including their features and namespaces.

    :param str name: Short name of the variant, as used on command line.
    :param str marker:
        Value of ``GTS_PDFVTVersion``, unique for each variant.
    :param str pdf_version: PDF version of generated documents.
    :param pdf_version_rule:
        :class:`AtLeast` or :class:`ExactlyEquals` rule that the declared
        PDF version of checked documents must follow.
    :param str base_standard: Name of the production standard extended.
    :param features: Descriptions of the variant features, for display.
    :param extra_metadata_namespaces:
        Dict whose keys are XML namespace prefixes and whose values are
        ``(uri, properties)`` tuples, ``properties`` being a dict of extra
        XMP properties to write.

    """
    __slots__ = ()

    def __new__(cls, name, marker, pdf_version, pdf_version_rule,
                base_standard, features=(), extra_metadata_namespaces=None):
        namespaces = MappingProxyType({
            prefix: (uri, MappingProxyType(dict(properties)))
            for prefix, (uri, properties)
            in (extra_metadata_namespaces or {}).items()})
        return super().__new__(
            cls, name, marker, pdf_version, pdf_version_rule, base_standard,
            tuple(features), namespaces)

    def __repr__(self):
        return f'<{type(self).__name__} {self.marker}>'


class ProfileRegistry:
    """Immutable collection of :class:`VersionProfile` objects.

    Profiles are iterated in registration order, oldest variant first.

    """
    def __init__(self, profiles):
        self._profiles = tuple(profiles)
        self._by_marker = {}
        self._by_name = {}
        for profile in self._profiles:
            if profile.marker in self._by_marker:
                raise ValueError(f'Duplicate PDF/VT marker {profile.marker!r}')
            if profile.name in self._by_name:
                raise ValueError(f'Duplicate PDF/VT variant {profile.name!r}')
            self._by_marker[profile.marker] = profile
            self._by_name[profile.name] = profile

        # Markers found in other markers have to be checked last, as
        # documents including the longer marker include the shorter too.
        def specificity(item):
            index, profile = item
            contained = sum(
                other.marker in profile.marker for other in self._profiles
                if other is not profile)
            return -contained, -len(profile.marker), -index
        self._detection_order = tuple(
            profile for _, profile in
            sorted(enumerate(self._profiles), key=specificity))

    def __iter__(self):
        return iter(self._profiles)

    def __len__(self):
        return len(self._profiles)

    def __contains__(self, profile):
        return any(profile is known for known in self._profiles)

    def by_marker(self, marker):
        """Return the profile whose marker is ``marker``, or :obj:`None`."""
        return self._by_marker.get(marker)

    def by_name(self, name):
        """Return the profile called ``name``, raise :exc:`KeyError` if unknown."""
        return self._by_name[name]

    def detection_order(self):
        """Return profiles in the order their markers are searched in text.

        Most specific markers come first: markers including other markers,
        then longest markers, then most recent variants.

        """
        return self._detection_order

    def resolve(self, variant):
        """Get a registered profile from a profile, a name or a marker."""
        if isinstance(variant, VersionProfile):
            if variant not in self:
                raise ValueError(f'Unregistered PDF/VT profile {variant!r}')
            return variant
        profile = self._by_name.get(variant) or self._by_marker.get(variant)
        if profile is None:
            raise KeyError(f'Unknown PDF/VT variant {variant!r}')
        return profile


VT1 = VersionProfile(
    name='vt1',
    marker='PDF/VT-1',
    pdf_version='1.6',
    pdf_version_rule=AtLeast(1, 6),
    base_standard='PDF/X-4',
    features=(
        'Document Part Metadata (DPM) for tracking individual records',
        'Efficient reuse of common resources across pages',
        'Support for encapsulated external content',
        'Optimized for high-speed variable data printing',
        'Built on PDF/X-4 foundation for print production',
        'Uses PDF 1.6 with transparency and layers support',
    ))

VT3 = VersionProfile(
    name='vt3',
    marker='PDF/VT-3',
    pdf_version='2.0',
    pdf_version_rule=ExactlyEquals('2.0'),
    base_standard='PDF/X-6',
    features=(
        'Document Part Metadata (DPM) for tracking individual records',
        'Efficient reuse of common resources across pages',
        'Simplified transparency rules (page-level only)',
        'Per-page Output Intents with optional CxF/X-4 spectral data',
        'Enhanced Black Point Compensation support',
        'Built on PDF/X-6 foundation (PDF 2.0)',
        'Modern toolchain alignment for VDP workflows',
    ),
    extra_metadata_namespaces={
        'pdf': (NS['pdf'], {'PDFVersion': '2.0'}),
        'pdfx6': (
            'http://www.npes.org/pdfx6/ns/id/',
            {'GTS_PDFXConformance': 'PDF/X-6'}),
    })

REGISTRY = ProfileRegistry((VT1, VT3))


class MetadataWriter:
    """Stamp PDF/VT metadata into :class:`pydyf.PDF` objects.

    The writer keeps no state between documents and can be reused.

    """
    def __init__(self, registry=REGISTRY):
        self.registry = registry

    def write(self, pdf, profile, metadata, compress=True):
        """Write info, catalog and XMP metadata of ``profile`` into ``pdf``.

        XMP metadata is generated before the catalog is changed, errors are
        propagated.

        """
        profile = self.registry.resolve(profile)
        xml_data = generate_rdf_metadata(metadata, profile)

        pdf.info['Producer'] = pydyf.String(f'pdfvt {__version__}')
        if metadata.title:
            pdf.info['Title'] = pydyf.String(metadata.title)
        if metadata.authors:
            pdf.info['Author'] = pydyf.String(', '.join(metadata.authors))
        if metadata.description:
            pdf.info['Subject'] = pydyf.String(metadata.description)
        if metadata.keywords:
            pdf.info['Keywords'] = pydyf.String(', '.join(metadata.keywords))
        if metadata.generator:
            pdf.info['Creator'] = pydyf.String(metadata.generator)
        for key, attr_name in (('CreationDate', 'created'), ('ModDate', 'modified')):
            pdf_date = w3c_date_to_pdf(getattr(metadata, attr_name), attr_name)
            if pdf_date:
                pdf.info[key] = pydyf.String(pdf_date)

        pdf.catalog[GTS_PDFVT_VERSION] = pydyf.String(profile.marker)
        pdf.catalog['MarkInfo'] = pydyf.Dictionary({'Marked': 'true'})
        add_metadata(pdf, xml_data, compress)
        LOGGER.debug('%s metadata written', profile.marker)
