# topmark:header:start
#
#   project      : CommentFlow
#   file         : __init__.py
#   file_relpath : src/commentflow/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Subcommands registered on the ``commentflow`` group."""
