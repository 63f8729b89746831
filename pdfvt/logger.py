"""Logging setup.

The rest of the code gets the logger through this module rather than
``logging.getLogger`` to make sure that it is configured.

Logging levels are used for specific purposes:

- errors are used in ``LOGGER`` for missing input files;
- warnings are used in ``LOGGER`` for unreadable PDF files, invalid metadata
  dates and various non-fatal problems;
- infos are used in ``LOGGER`` for detected PDF/VT variants, and in
  ``PROGRESS_LOGGER`` to advertise generation and checking steps;
- debug messages are used in ``LOGGER`` for the evidence found in documents.

"""

import contextlib
import logging

LOGGER = logging.getLogger('pdfvt')
if not LOGGER.handlers:  # pragma: no cover
    LOGGER.setLevel(logging.WARNING)
    LOGGER.addHandler(logging.NullHandler())

PROGRESS_LOGGER = logging.getLogger('pdfvt.progress')


class MessageList(logging.Handler):
    """Handler storing ``LEVEL: message`` strings, progress excluded."""
    def __init__(self, level):
        super().__init__(level)
        self.messages = []
        self.addFilter(lambda record: record.name != PROGRESS_LOGGER.name)

    def emit(self, record):
        self.messages.append(f'{record.levelname}: {record.getMessage()}')


@contextlib.contextmanager
def capture_logs(level=logging.INFO):
    """Return a context manager collecting messages logged by ``LOGGER``."""
    handler = MessageList(level)
    previous_handlers, previous_level = LOGGER.handlers, LOGGER.level
    LOGGER.handlers = [handler]
    LOGGER.setLevel(logging.DEBUG)
    try:
        yield handler.messages
    finally:
        LOGGER.handlers = previous_handlers
        LOGGER.setLevel(previous_level)
