"""
Utility functions.
"""
import contextlib
import logging

from fastasplit.config import defaults

log = logging.getLogger(__name__)


class ValidationError(ValueError):
    """Raised when the user's request cannot be processed."""


def normalized_lines(handle):
    """
    Yield the non-empty lines of a text handle.

    The handle should be opened with universal newlines (the default for text mode), so `\\r\\n` and lone `\\r` line
    endings already arrive as `\\n`. Empty lines are dropped.

    :param handle: Text file handle or any iterable of lines.
    :return: Generator of lines, each keeping its trailing newline (except possibly the last).
    """
    for line in handle:
        if line.rstrip('\r\n'):
            yield line


@contextlib.contextmanager
def open_normalized(path_to_file, encoding=None):
    """
    Open a file and provide its normalized lines.

    :param path_to_file: Path to a text file.
    :param encoding: Text encoding, defaults to the configured encoding.
    :return: Context manager yielding a `normalized_lines` generator.
    """
    with open(path_to_file, 'r', encoding=encoding or defaults.encoding, newline=None) as handle:
        yield normalized_lines(handle)
