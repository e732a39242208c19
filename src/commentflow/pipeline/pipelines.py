# topmark:header:start
#
#   project      : CommentFlow
#   file         : pipelines.py
#   file_relpath : src/commentflow/pipeline/pipelines.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Named pipeline variants (immutable, typed step sequences).

Overview
--------
- ``CHECK``: read -> reflow
- ``CHECK_PATCH``: CHECK + patch
- ``APPLY``: CHECK + write
- ``APPLY_PATCH``: CHECK + patch -> write

```mermaid
flowchart LR
  R[reader] --> F[reflower]
  F -->|--diff| P[patcher]
  F -->|--apply / --stdout| W[writer]
  P --> W
```

Notes:
* Pipelines are immutable (``Final[tuple[BaseStep, ...]]``) and steps are
  instantiated objects, shared by every file of a run.
"""

from __future__ import annotations

from enum import Enum
from typing import Final

from .steps import patcher, reader, reflower, writer
from .steps.base import BaseStep

CHECK_PIPELINE: Final[tuple[BaseStep, ...]] = (
    reader.ReaderStep(),  # Load the file image and newline facts
    reflower.ReflowStep(),  # Apply the rewrite rules
)

CHECK_PATCH_PIPELINE: Final[tuple[BaseStep, ...]] = CHECK_PIPELINE + (
    patcher.PatcherStep(),  # Generate unified diff
)

APPLY_PIPELINE: Final[tuple[BaseStep, ...]] = CHECK_PIPELINE + (
    writer.WriterStep(),  # Write changes to file/stdout
)

APPLY_PATCH_PIPELINE: Final[tuple[BaseStep, ...]] = CHECK_PATCH_PIPELINE + (
    writer.WriterStep(),  # Write changes to file/stdout
)


class Pipeline(Enum):
    """Registry of the available pipelines."""

    CHECK = CHECK_PIPELINE
    CHECK_PATCH = CHECK_PATCH_PIPELINE
    APPLY = APPLY_PIPELINE
    APPLY_PATCH = APPLY_PATCH_PIPELINE

    @property
    def steps(self) -> tuple[BaseStep, ...]:
        """Return the ordered steps of this pipeline."""
        return self.value

    @classmethod
    def select(cls, *, write: bool, diff: bool) -> Pipeline:
        """Return the pipeline for the requested combination of writing and diffing."""
        if write:
            return cls.APPLY_PATCH if diff else cls.APPLY
        return cls.CHECK_PATCH if diff else cls.CHECK
