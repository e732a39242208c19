# topmark:header:start
#
#   project      : CommentFlow
#   file         : __init__.py
#   file_relpath : src/commentflow/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration package for CommentFlow.

Re-exports the immutable runtime `Config`, the `MutableConfig` builder and the
`WriteStrategy` enum. TOML helpers live in `commentflow.config.io` and the
logging setup in `commentflow.config.logging`.
"""

from __future__ import annotations

from commentflow.config.model import ArgsLike, Config, MutableConfig, WriteStrategy

__all__: list[str] = [
    "ArgsLike",
    "Config",
    "MutableConfig",
    "WriteStrategy",
]
