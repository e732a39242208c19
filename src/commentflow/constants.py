# topmark:header:start
#
#   project      : CommentFlow
#   file         : constants.py
#   file_relpath : src/commentflow/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CommentFlow Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    COMMENTFLOW_VERSION: str = get_version("commentflow")
except PackageNotFoundError:
    COMMENTFLOW_VERSION = "0.0.0"

# Name of the bundled default config inside the package `commentflow.config`:
DEFAULT_TOML_CONFIG_PACKAGE: str = "commentflow.config"
DEFAULT_TOML_CONFIG_NAME: str = "commentflow-default.toml"

# Config file names recognized during discovery:
PYPROJECT_TOML_NAME: str = "pyproject.toml"
COMMENTFLOW_TOML_NAME: str = "commentflow.toml"
PYPROJECT_TOOL_SECTION: str = "tool.commentflow"

# Formatting defaults (mirrored in commentflow-default.toml):
DEFAULT_LINE_LENGTH: int = 79
DEFAULT_BREAK_CHARS: str = " ,.:;"
DEFAULT_BLOCK_DELIMITER: str = '"""'
DEFAULT_COMMENT_MARKER: str = "#"
DEFAULT_STATEMENT_PREFIX: str = "print("
DEFAULT_EXCLUDED_PREFIX: str = "def "

DEFAULT_FORMATTER_COMMAND: str = "black"
DEFAULT_EXTENSIONS: tuple[str, ...] = (".py",)
DEFAULT_ENCODING: str = "utf-8"

# Hard lower bound for the wrapper width once indentation is subtracted:
MIN_WRAP_WIDTH: int = 1
