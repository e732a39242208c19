# topmark:header:start
#
#   project      : CommentFlow
#   file         : __main__.py
#   file_relpath : src/commentflow/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running CommentFlow via ``python -m commentflow``.

Delegates to :func:`commentflow.cli.main.cli`, so the module form and the
``commentflow`` console script share a single entry point.

Examples:
    Preview the changes for a source tree::

        python -m commentflow reflow src
"""

from __future__ import annotations

from commentflow.cli.main import cli

if __name__ == "__main__":
    cli()
