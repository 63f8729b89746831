"""Command-line interface to pdfvt."""

import argparse
import logging
import sys

from . import DEFAULT_OPTIONS, LOGGER, REGISTRY, __version__
from .checker import ComplianceChecker
from .document import Document


class Parser(argparse.ArgumentParser):
    def __init__(self, *args, **kwargs):
        self._arguments = {}
        super().__init__(*args, **kwargs)

    def add_argument(self, *args, **kwargs):
        super().add_argument(*args, **kwargs)
        key = args[-1].lstrip('-')
        kwargs['flags'] = args
        kwargs['positional'] = args[-1][0] != '-'
        self._arguments[key] = kwargs

    @property
    def docstring(self):
        self._arguments['help'] = self._arguments.pop('help')
        data = []
        for key, args in self._arguments.items():
            data.append('.. option:: ')
            action = args.get('action', 'store')
            for flag in args['flags']:
                data.append(flag)
                if not args['positional'] and action in ('store', 'append'):
                    data.append(f' <{key}>')
                data.append(', ')
            data[-1] = '\n\n'
            data.append(f'  {args["help"][0].upper()}{args["help"][1:]}.\n\n')
            if 'choices' in args:
                choices = ", ".join(args['choices'])
                data.append(f'  Possible choices: {choices}.\n\n')
        return ''.join(data)


PARSER = Parser(
    prog='pdfvt', description='Generate PDF/VT documents or check compliance.')
PARSER.add_argument(
    '-V', '--variant', choices=[profile.name for profile in REGISTRY],
    default='vt1', help='PDF/VT variant to generate, defaults to vt1')
PARSER.add_argument(
    '-o', '--output', default='output.pdf',
    help='filename where output is written, defaults to output.pdf')
PARSER.add_argument(
    '-c', '--check', metavar='FILENAME',
    help='check PDF/VT compliance of an existing PDF file instead of '
    'generating a document')
PARSER.add_argument(
    '-i', '--image',
    help='filename of the image embedded in the document, defaults to a '
    'generated geometric design')
PARSER.add_argument(
    '--no-image', action='store_false', dest='sample_image',
    help='do not embed any image in the document')
PARSER.add_argument('--pdf-identifier', help='PDF file identifier')
PARSER.add_argument(
    '--pdf-version',
    help='PDF version number, overriding the version of the variant')
PARSER.add_argument(
    '--uncompressed-pdf', action='store_true',
    help='do not compress PDF content, mainly for debugging purpose')
PARSER.add_argument(
    '-v', '--verbose', action='store_true',
    help='show warnings and information messages')
PARSER.add_argument(
    '-d', '--debug', action='store_true', help='show debugging messages')
PARSER.add_argument(
    '-q', '--quiet', action='store_true', help='hide logging messages')
PARSER.add_argument(
    '--version', action='version',
    version=f'pdfvt version {__version__}',
    help='print pdfvt’s version number and exit')
PARSER.set_defaults(**DEFAULT_OPTIONS)


def _check(filename, stdout):
    checker = ComplianceChecker()
    try:
        result = checker.check(filename)
    except FileNotFoundError as exception:
        LOGGER.error('File not found: %s', exception.filename)
        sys.exit(1)
    print(f'File: {filename}', file=stdout)
    print(result.summary(), file=stdout)
    if not result.is_compliant:
        sys.exit(1)


def main(argv=None, stdout=None):
    """The ``pdfvt`` program generates a sample document by default:

    .. code-block:: sh

        pdfvt [options]

    With ``--check``, it checks an existing file instead, and exits with
    status 1 if the file is missing or not compliant:

    .. code-block:: sh

        pdfvt --check <filename>

    """
    args = PARSER.parse_args(argv)
    stdout = stdout or sys.stdout

    # Default to logging to stderr.
    if args.debug:
        LOGGER.setLevel(logging.DEBUG)
    elif args.verbose:
        LOGGER.setLevel(logging.INFO)
    if not args.quiet:
        handler = logging.StreamHandler()
        if args.debug:
            # Add extra information when debug logging
            handler.setFormatter(
                logging.Formatter(
                    '%(levelname)s: %(filename)s:%(lineno)d '
                    '(%(funcName)s): %(message)s'))
        else:
            handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        LOGGER.addHandler(handler)

    if args.check:
        _check(args.check, stdout)
        return

    options = {
        key: value for key, value in vars(args).items() if key in DEFAULT_OPTIONS}
    document = Document(args.variant, image=args.image)
    profile = document.profile
    LOGGER.info(
        'Creating %s document with PDF %s', profile.marker,
        options['pdf_version'] or profile.pdf_version)
    document.write_pdf(args.output, **options)
    print(f'{profile.marker} document created: {args.output}', file=stdout)


main.__doc__ += '\n\n' + PARSER.docstring


if __name__ == '__main__':  # pragma: no cover
    main()
