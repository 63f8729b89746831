"""Configuration for pdfvt tests."""

import pytest

from pdfvt import Document


@pytest.fixture
def write_document(tmp_path):
    """Return a function writing a sample document in a temporary folder."""
    def write(variant, filename='document.pdf', finisher=None, **options):
        path = tmp_path / filename
        Document(variant).write_pdf(path, finisher=finisher, **options)
        return path
    return write
