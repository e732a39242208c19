# topmark:header:start
#
#   project      : CommentFlow
#   file         : status.py
#   file_relpath : src/commentflow/pipeline/status.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Status enums for each axis of the per-file pipeline.

Every step writes exactly one axis:

| Axis | Step | Enum |
|---|---|---|
| content | `ReaderStep` | `ContentStatus` |
| reflow | `ReflowStep` | `ReflowStatus` |
| patch | `PatcherStep` | `PatchStatus` |
| write | `WriterStep` | `WriteStatus` |

Values are human-readable labels used in the CLI summary; compare members with
``==`` rather than ``is``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from yachalk import chalk

from commentflow.utils.colored_enum import ColoredStrEnum


class Axis(str, Enum):
    """Pipeline axes, one per step."""

    CONTENT = "content"
    REFLOW = "reflow"
    PATCH = "patch"
    WRITE = "write"


class ContentStatus(ColoredStrEnum):
    """Outcome of loading the file."""

    PENDING = ("read pending", chalk.gray)
    OK = ("ok", chalk.green)
    EMPTY = ("empty file", chalk.yellow)
    NOT_FOUND = ("not found", chalk.red)
    UNREADABLE = ("read error", chalk.red_bright)
    DECODE_ERROR = ("cannot decode file", chalk.red_bright)


class ReflowStatus(ColoredStrEnum):
    """Outcome of running the rule engine."""

    PENDING = ("reflow pending", chalk.gray)
    UNCHANGED = ("up-to-date", chalk.green)
    CHANGED = ("would reflow", chalk.yellow_bright)
    SKIPPED = ("reflow skipped", chalk.yellow)


class PatchStatus(ColoredStrEnum):
    """Outcome of building a unified diff."""

    PENDING = ("patch pending", chalk.gray)
    GENERATED = ("patch generated", chalk.green)
    SKIPPED = ("patch skipped", chalk.yellow)


class WriteStatus(ColoredStrEnum):
    """Outcome of committing the rewritten content."""

    PENDING = ("write pending", chalk.gray)
    WRITTEN = ("reflowed", chalk.green_bright)
    SKIPPED = ("write skipped", chalk.yellow)
    FAILED = ("write failed", chalk.red_bright)


@dataclass
class ProcessingStatus:
    """Current status of every axis for one file."""

    content: ContentStatus = ContentStatus.PENDING
    reflow: ReflowStatus = ReflowStatus.PENDING
    patch: PatchStatus = PatchStatus.PENDING
    write: WriteStatus = WriteStatus.PENDING

    def get(self, axis: Axis) -> ColoredStrEnum:
        """Return the status recorded for ``axis``."""
        match axis:
            case Axis.CONTENT:
                return self.content
            case Axis.REFLOW:
                return self.reflow
            case Axis.PATCH:
                return self.patch
            case Axis.WRITE:
                return self.write
