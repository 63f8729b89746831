"""Test PDF/VT compliance checks."""

import pikepdf
import pytest

from pdfvt import (
    REGISTRY, AtLeast, ComplianceChecker, Document, ProfileRegistry,
    VersionProfile, check_compliance)
from pdfvt.logger import capture_logs
from pdfvt.pdf.pdfvt import VT1, VT3

from .testing_utils import assert_no_logs, build_pdf, xmp_packet


def _delete_mark_info(document, pdf):
    del pdf.catalog['MarkInfo']


def _unmark(document, pdf):
    pdf.catalog['MarkInfo']['Marked'] = 'false'


def _delete_metadata(document, pdf):
    del pdf.catalog['Metadata']


@assert_no_logs
@pytest.mark.parametrize('profile', REGISTRY)
@pytest.mark.parametrize('uncompressed', (True, False))
def test_round_trip(write_document, profile, uncompressed):
    path = write_document(profile.name, uncompressed_pdf=uncompressed)
    result = check_compliance(path)
    assert result.is_compliant
    assert result.detected_variant is profile
    assert result.raw_marker == profile.marker
    assert result.declared_pdf_version == profile.pdf_version
    assert result.has_catalog_marker
    assert result.has_packet_marker
    assert result.has_structure_flag
    assert result.issues == ()


@assert_no_logs
def test_round_trip_no_image(write_document):
    path = write_document('vt1', sample_image=False)
    assert check_compliance(path).is_compliant


@assert_no_logs
@pytest.mark.parametrize('variant, expected, compliant', (
    ('vt1', 'vt1', True),
    ('vt1', 'PDF/VT-3', False),
    ('vt3', VT3, True),
    ('vt3', VT1, False),
))
def test_is_compliant(write_document, variant, expected, compliant):
    path = write_document(variant)
    assert ComplianceChecker().is_compliant(path, expected) is compliant


def test_is_compliant_unknown_variant(write_document):
    path = write_document('vt1')
    with pytest.raises(KeyError):
        ComplianceChecker().is_compliant(path, 'vt2')


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError) as exc_info:
        check_compliance(tmp_path / 'missing.pdf')
    assert exc_info.value.filename == str(tmp_path / 'missing.pdf')


@assert_no_logs
@pytest.mark.parametrize('finisher', (_delete_mark_info, _unmark))
def test_no_structure_flag(write_document, finisher):
    path = write_document('vt1', finisher=finisher)
    result = check_compliance(path)
    assert not result.is_compliant
    assert result.detected_variant is VT1
    assert result.has_catalog_marker
    assert result.has_packet_marker
    assert not result.has_structure_flag
    assert result.issues == ('MarkInfo with Marked=true not found',)


@assert_no_logs
def test_non_boolean_structure_flag(tmp_path):
    path = build_pdf(
        tmp_path / 'test.pdf', marker='PDF/VT-1', marked=1,
        packet=xmp_packet('PDF/VT-1'))
    result = check_compliance(path)
    assert not result.is_compliant
    assert not result.has_structure_flag


@assert_no_logs
@pytest.mark.parametrize('version, compliant', (
    ('1.4', False),
    ('1.5', False),
    ('1.6', True),
    ('1.7', True),
    ('2.0', True),
))
def test_vt1_pdf_version(write_document, version, compliant):
    path = write_document('vt1', pdf_version=version)
    result = check_compliance(path)
    assert result.declared_pdf_version == version
    assert result.detected_variant is VT1
    assert result.is_compliant is compliant
    if compliant:
        assert result.issues == ()
    else:
        assert result.issues == (
            f'PDF/VT-1 requires PDF 1.6+, found {version}',)


@assert_no_logs
@pytest.mark.parametrize('version', ('1.6', '1.7', '2.1'))
def test_vt3_pdf_version(write_document, version):
    path = write_document('vt3', pdf_version=version)
    result = check_compliance(path)
    assert not result.is_compliant
    assert result.detected_variant is VT3
    assert result.has_catalog_marker
    assert result.has_packet_marker
    assert result.has_structure_flag
    assert result.issues == (f'PDF/VT-3 requires PDF 2.0, found {version}',)


@assert_no_logs
def test_no_packet(write_document):
    path = write_document('vt1', finisher=_delete_metadata)
    result = check_compliance(path)
    assert result.is_compliant
    assert result.detected_variant is VT1
    assert not result.has_packet_marker
    assert result.issues == ('No XMP metadata packet found',)


@assert_no_logs
def test_packet_without_key(tmp_path):
    path = build_pdf(
        tmp_path / 'test.pdf', marker='PDF/VT-1', packet=xmp_packet())
    result = check_compliance(path)
    assert result.is_compliant
    assert not result.has_packet_marker
    assert result.issues == ('GTS_PDFVTVersion not found in XMP metadata',)


@assert_no_logs
def test_packet_mismatch(tmp_path):
    path = build_pdf(
        tmp_path / 'test.pdf', marker='PDF/VT-1',
        packet=xmp_packet('PDF/VT-3'))
    result = check_compliance(path)
    assert result.is_compliant
    assert result.detected_variant is VT1
    assert not result.has_packet_marker
    assert result.issues == (
        "GTS_PDFVTVersion in XMP metadata does not match 'PDF/VT-1'",)


@assert_no_logs
@pytest.mark.parametrize('markers, profile', (
    (('PDF/VT-1',), VT1),
    (('PDF/VT-3',), VT3),
    (('PDF/VT-1', 'PDF/VT-3'), VT3),
    (('PDF/VT-3', 'PDF/VT-1'), VT3),
))
def test_packet_fallback(tmp_path, markers, profile):
    path = build_pdf(
        tmp_path / 'test.pdf', version=profile.pdf_version,
        packet=xmp_packet(*markers))
    result = check_compliance(path)
    assert not result.is_compliant
    assert result.detected_variant is profile
    assert result.raw_marker == profile.marker
    assert not result.has_catalog_marker
    assert result.has_packet_marker
    assert result.has_structure_flag
    assert result.issues == ('GTS_PDFVTVersion not found in catalog',)


@assert_no_logs
def test_catalog_marker_first(tmp_path):
    path = build_pdf(
        tmp_path / 'test.pdf', marker='PDF/VT-1',
        packet=xmp_packet('PDF/VT-1', 'PDF/VT-3'))
    result = check_compliance(path)
    assert result.is_compliant
    assert result.detected_variant is VT1
    assert result.has_packet_marker


@assert_no_logs
def test_unknown_marker(tmp_path):
    path = build_pdf(
        tmp_path / 'test.pdf', marker='PDF/VT-2',
        packet=xmp_packet('PDF/VT-2'))
    result = check_compliance(path)
    assert not result.is_compliant
    assert result.detected_variant is None
    assert result.raw_marker == 'PDF/VT-2'
    assert result.has_catalog_marker
    assert result.has_packet_marker
    assert result.issues == ('Unknown PDF/VT version: PDF/VT-2',)


@assert_no_logs
def test_no_marker(tmp_path):
    path = build_pdf(tmp_path / 'test.pdf')
    result = check_compliance(path)
    assert not result.is_compliant
    assert result.detected_variant is None
    assert result.raw_marker is None
    assert result.declared_pdf_version == '1.6'
    assert result.has_structure_flag
    assert result.issues == (
        'GTS_PDFVTVersion not found in catalog',
        'No XMP metadata packet found',
        'No PDF/VT version marker found')


@assert_no_logs
def test_non_string_marker(tmp_path):
    path = tmp_path / 'test.pdf'
    with pikepdf.new() as pdf:
        pdf.add_blank_page()
        pdf.Root[pikepdf.Name.GTS_PDFVTVersion] = pikepdf.Name('/PDFVT1')
        pdf.Root[pikepdf.Name.MarkInfo] = pikepdf.Dictionary(Marked=True)
        pdf.save(path, force_version='1.6')
    result = check_compliance(path)
    assert not result.is_compliant
    assert not result.has_catalog_marker
    assert 'GTS_PDFVTVersion not found in catalog' in result.issues


@pytest.mark.parametrize('content', (b'', b'not a PDF file'))
def test_corrupt_file(tmp_path, content):
    path = tmp_path / 'corrupt.pdf'
    path.write_bytes(content)
    with capture_logs() as logs:
        result = check_compliance(path)
    assert not result.is_compliant
    assert result.detected_variant is None
    assert len(result.issues) == 1
    assert result.issues[0].startswith('Error reading PDF: ')
    assert len(logs) == 1
    assert logs[0].startswith('WARNING: Unable to read ')


def test_result_read_only(write_document):
    result = check_compliance(write_document('vt1'))
    with pytest.raises(AttributeError):
        result.is_compliant = False
    with pytest.raises(AttributeError):
        result.issues.append('Unexpected issue')
    assert repr(result) == '<ComplianceResult PDF/VT-1 compliant>'


def test_summary_compliant(write_document):
    result = check_compliance(write_document('vt3'))
    summary = result.summary()
    assert summary.splitlines()[:4] == [
        'PDF/VT Compliance Check Results',
        '   PDF Version: 2.0',
        '   Detected: PDF/VT-3',
        '   Compliant: ✓ Yes',
    ]
    assert 'GTS in Catalog: ✓' in summary
    assert 'GTS in XMP:     ✓' in summary
    assert 'MarkInfo:       ✓' in summary
    assert 'Issues' not in summary


def test_summary_issues(tmp_path):
    result = check_compliance(build_pdf(tmp_path / 'test.pdf', marked=None))
    summary = result.summary()
    assert '   Detected: Not PDF/VT' in summary
    assert '   Compliant: ✗ No' in summary
    assert 'MarkInfo:       ✗' in summary
    assert '   ⚠ MarkInfo with Marked=true not found' in summary
    assert '   ⚠ No PDF/VT version marker found' in summary


@assert_no_logs
def test_checker_reusable(write_document):
    checker = ComplianceChecker()
    first = checker.check(write_document('vt1', 'first.pdf'))
    second = checker.check(write_document('vt3', 'second.pdf'))
    assert first.detected_variant is VT1
    assert second.detected_variant is VT3


@assert_no_logs
def test_custom_registry(tmp_path):
    x1 = VersionProfile('x1', 'X-1', '1.6', AtLeast(1, 6), 'PDF/X-4')
    registry = ProfileRegistry((x1,))

    path = tmp_path / 'x1.pdf'
    Document('x1', registry=registry).write_pdf(path)
    result = ComplianceChecker(registry).check(path)
    assert result.is_compliant
    assert result.detected_variant is x1
    assert result.declared_pdf_version == '1.6'
    assert result.has_catalog_marker
    assert result.has_packet_marker
    assert result.has_structure_flag
    assert result.issues == ()

    path = tmp_path / 'x1-no-packet.pdf'
    Document('x1', registry=registry).write_pdf(
        path, finisher=_delete_metadata)
    result = ComplianceChecker(registry).check(path)
    assert result.is_compliant
    assert not result.has_packet_marker
    assert result.issues == ('No XMP metadata packet found',)


@assert_no_logs
def test_custom_registry_unknown_in_default(tmp_path):
    x1 = VersionProfile('x1', 'X-1', '1.6', AtLeast(1, 6), 'PDF/X-4')
    path = tmp_path / 'x1.pdf'
    Document(x1, registry=ProfileRegistry((x1,))).write_pdf(path)
    result = check_compliance(path)
    assert not result.is_compliant
    assert result.raw_marker == 'X-1'
    assert result.issues == ('Unknown PDF/VT version: X-1',)
