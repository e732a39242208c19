# topmark:header:start
#
#   project      : CommentFlow
#   file         : __init__.py
#   file_relpath : src/commentflow/pipeline/rules/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rewrite rules applied by the reflow engine.

Rules are tried in a fixed priority order at every line index:

1. [`BlockCommentRule`][commentflow.pipeline.rules.block_comment.BlockCommentRule]
2. [`CommentedPrintRule`][commentflow.pipeline.rules.commented_print.CommentedPrintRule]
3. [`InlineCommentRule`][commentflow.pipeline.rules.inline_comment.InlineCommentRule]
4. [`CommentRunRule`][commentflow.pipeline.rules.comment_run.CommentRunRule]
"""

from __future__ import annotations

from commentflow.pipeline.rules.base import BaseRule, RuleKind, RuleOutcome
from commentflow.pipeline.rules.block_comment import BlockCommentRule
from commentflow.pipeline.rules.comment_run import CommentRunRule
from commentflow.pipeline.rules.commented_print import CommentedPrintRule
from commentflow.pipeline.rules.inline_comment import InlineCommentRule

__all__ = [
    "BaseRule",
    "BlockCommentRule",
    "CommentRunRule",
    "CommentedPrintRule",
    "InlineCommentRule",
    "RuleKind",
    "RuleOutcome",
]
