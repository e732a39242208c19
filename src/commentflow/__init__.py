# topmark:header:start
#
#   project      : CommentFlow
#   file         : __init__.py
#   file_relpath : src/commentflow/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CommentFlow package.

CommentFlow reflows comment regions in Python source files so that no line
exceeds a fixed column width. It normalizes commented-out ``print(...)``
statements, overlong inline comments, runs of full-line comments and existing
triple-quoted blocks, and exposes a CLI for batch use.
"""

from __future__ import annotations
