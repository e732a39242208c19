# topmark:header:start
#
#   project      : CommentFlow
#   file         : exit_codes.py
#   file_relpath : src/commentflow/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the CommentFlow CLI.

Values follow the BSD ``sysexits`` convention where practical. The exception
is ``WOULD_CHANGE = 2``, which reports a dry run with pending changes. Click
also exits with 2 on usage errors, so tests check ``result.exception`` to tell
the two apart.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the CommentFlow CLI.

    Attributes:
        SUCCESS: Nothing to change, or all changes were written.
        FAILURE: Generic failure.
        WOULD_CHANGE: Dry run: files would change with ``--apply``.
        USAGE_ERROR: Invalid invocation. Mirrors ``EX_USAGE (64)``.
        ENCODING_ERROR: A file could not be decoded. Mirrors ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: An input path does not exist. Mirrors ``EX_NOINPUT (66)``.
        FORMATTER_UNAVAILABLE: The external formatter is missing. Mirrors
            ``EX_UNAVAILABLE (69)``.
        IO_ERROR: A file could not be read or written. Mirrors ``EX_IOERR (74)``.
        CONFIG_ERROR: Invalid configuration. Mirrors ``EX_CONFIG (78)``.
    """

    SUCCESS = 0
    FAILURE = 1
    WOULD_CHANGE = 2  # not a sysexits code

    USAGE_ERROR = 64  # EX_USAGE
    ENCODING_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    FORMATTER_UNAVAILABLE = 69  # EX_UNAVAILABLE
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG
