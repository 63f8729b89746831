"""PDF metadata stream generation."""

import re
from xml.etree.ElementTree import Element, SubElement, register_namespace, tostring

import pydyf

from .. import __version__
from ..logger import LOGGER

# XML namespaces used for metadata
NS = {
    'x': 'adobe:ns:meta/',
    'rdf': 'http://www.w3.org/1999/02/22-rdf-syntax-ns#',
    'dc': 'http://purl.org/dc/elements/1.1/',
    'xmp': 'http://ns.adobe.com/xap/1.0/',
    'pdf': 'http://ns.adobe.com/pdf/1.3/',
    'pdfx': 'http://ns.adobe.com/pdfx/1.3/',
    'pdfxid': 'http://www.npes.org/pdfx/ns/id/',
    'pdfvtid': 'http://www.npes.org/pdfvt/ns/id/',
}
for key, value in NS.items():
    register_namespace(key, value)

# Key used for PDF/VT version in the catalog and in XMP metadata
GTS_PDFVT_VERSION = 'GTS_PDFVTVersion'

# W3C dates, see https://www.w3.org/TR/NOTE-datetime
W3C_DATE_RE = re.compile(r'''
    \s*
    (?P<year>\d{4})
    (?:-(?P<month>0\d|1[012])
        (?:-(?P<day>[012]\d|3[01])
            (?:T(?P<hour>[01]\d|2[0-3]):(?P<minute>[0-5]\d)
                (?::(?P<second>[0-5]\d)(?:\.\d+)?)?
                (?:Z|(?P<tz_sign>[+-])(?P<tz_hour>[01]\d|2[0-3]):(?P<tz_minute>[0-5]\d))
            )?
        )?
    )?
    \s*
''', re.VERBOSE)


def w3c_date_to_pdf(string, attr_name):
    """Convert W3C date to PDF date, return :obj:`None` if invalid."""
    if string is None:
        return None
    match = W3C_DATE_RE.fullmatch(string)
    if match is None:
        LOGGER.warning('Invalid %s date: %r', attr_name, string)
        return None
    date = match.groupdict()
    if date['hour'] is None:
        fields = ('year', 'month', 'day')
    else:
        # Seconds are optional in W3C times, not in PDF times
        date['second'] = date['second'] or '00'
        fields = ('year', 'month', 'day', 'hour', 'minute', 'second')
    pdf_date = ''.join(date[field] for field in fields if date[field])
    if date['hour'] is not None:
        if date['tz_sign'] is None:
            pdf_date += 'Z'
        else:
            pdf_date += f"{date['tz_sign']}{date['tz_hour']}'{date['tz_minute']}"
    return f'D:{pdf_date}'


def add_metadata(pdf, xml_data, compress):
    """Add PDF stream of metadata.

    Described in ISO-32000-1:2008, 14.3.2.

    """
    header = b'<?xpacket begin="" id="W5M0MpCehiHzreSzNTczkc9d"?>'
    footer = b'<?xpacket end="r"?>'
    stream_content = b'\n'.join((header, xml_data, footer))
    extra = {'Type': '/Metadata', 'Subtype': '/XML'}
    metadata = pydyf.Stream([stream_content], extra, compress)
    pdf.add_object(metadata)
    pdf.catalog['Metadata'] = metadata.reference


def _description(rdf):
    element = SubElement(rdf, f'{{{NS["rdf"]}}}Description')
    element.attrib[f'{{{NS["rdf"]}}}about'] = ''
    return element


def generate_rdf_metadata(metadata, profile):
    """Generate XMP metadata for ``profile`` as a bytestring.

    The PDF/VT marker is stored in both the PDF/VT identification schema and
    the legacy PDF/X schema, followed by the extra properties required by the
    profile.

    """
    for prefix, (uri, _) in profile.extra_metadata_namespaces.items():
        register_namespace(prefix, uri)

    xmpmeta = Element(f'{{{NS["x"]}}}xmpmeta')
    rdf = SubElement(xmpmeta, f'{{{NS["rdf"]}}}RDF')

    element = _description(rdf)
    for key in (
            f'{{{NS["pdfvtid"]}}}{GTS_PDFVT_VERSION}',
            f'{{{NS["pdfx"]}}}{GTS_PDFVT_VERSION}'):
        subelement = SubElement(element, key)
        subelement.text = profile.marker
    for uri, properties in profile.extra_metadata_namespaces.values():
        for name, value in properties.items():
            subelement = SubElement(element, f'{{{uri}}}{name}')
            subelement.text = str(value)

    element = _description(rdf)
    element.attrib[f'{{{NS["pdf"]}}}Producer'] = f'pdfvt {__version__}'

    if metadata.title:
        element = SubElement(_description(rdf), f'{{{NS["dc"]}}}title')
        element = SubElement(element, f'{{{NS["rdf"]}}}Alt')
        element = SubElement(element, f'{{{NS["rdf"]}}}li')
        element.attrib['xml:lang'] = 'x-default'
        element.text = metadata.title
    if metadata.authors:
        element = SubElement(_description(rdf), f'{{{NS["dc"]}}}creator')
        element = SubElement(element, f'{{{NS["rdf"]}}}Seq')
        for author in metadata.authors:
            author_element = SubElement(element, f'{{{NS["rdf"]}}}li')
            author_element.text = author
    if metadata.description:
        element = SubElement(_description(rdf), f'{{{NS["dc"]}}}description')
        element = SubElement(element, f'{{{NS["rdf"]}}}Alt')
        element = SubElement(element, f'{{{NS["rdf"]}}}li')
        element.attrib['xml:lang'] = 'x-default'
        element.text = metadata.description
    if metadata.keywords:
        element = SubElement(_description(rdf), f'{{{NS["pdf"]}}}Keywords')
        element.text = ', '.join(metadata.keywords)
    if metadata.generator:
        element = SubElement(_description(rdf), f'{{{NS["xmp"]}}}CreatorTool')
        element.text = metadata.generator
    if metadata.created:
        element = SubElement(_description(rdf), f'{{{NS["xmp"]}}}CreateDate')
        element.text = metadata.created
    if metadata.modified:
        element = SubElement(_description(rdf), f'{{{NS["xmp"]}}}ModifyDate')
        element.text = metadata.modified
    return tostring(xmpmeta, encoding='utf-8')
