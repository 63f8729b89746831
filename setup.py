#!/usr/bin/env python

"""
    pdfvt
    =====

    pdfvt generates PDF/VT documents and checks their compliance.

"""

from setuptools import setup

setup()
