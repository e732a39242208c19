# topmark:header:start
#
#   project      : CommentFlow
#   file         : __init__.py
#   file_relpath : src/commentflow/pipeline/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rule engine and per-file processing pipeline for CommentFlow."""
