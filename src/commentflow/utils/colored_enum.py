# topmark:header:start
#
#   project      : CommentFlow
#   file         : colored_enum.py
#   file_relpath : src/commentflow/utils/colored_enum.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""String enum whose members carry a display colorizer.

Members are declared as ``(label, colorizer)`` pairs; ``.value`` stays the plain
label so that equality, hashing and ``repr`` behave like any ``str`` enum,
while ``.color`` returns the associated callable (typically a yachalk builder).

Example:
    ```python
    from yachalk import chalk

    class Outcome(ColoredStrEnum):
        OK = ("ok", chalk.green)
        FAILED = ("failed", chalk.red_bright)

    Outcome.OK.color(Outcome.OK.value)  # green "ok"
    ```
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol


class Colorizer(Protocol):
    """Callable compatible with ``yachalk.ChalkBuilder.__call__``."""

    def __call__(self, *args: object, sep: str = " ") -> str:
        """Return the decorated, ``sep``-joined rendering of ``args``."""
        ...


class ColoredStrEnum(str, Enum):
    """``str`` enum storing a textual label and a colorizer per member."""

    _value_: str
    _color: Colorizer

    def __new__(cls, text: str, color: Colorizer) -> ColoredStrEnum:
        """Create a member whose value is ``text`` and whose colorizer is ``color``."""
        obj: ColoredStrEnum = str.__new__(cls, text)
        obj._value_ = text
        obj._color = color
        return obj

    @property
    def value(self) -> str:
        """Return the plain label of the member."""
        return self._value_

    @property
    def color(self) -> Colorizer:
        """Return the colorizer associated with the member."""
        return self._color

    def render(self) -> str:
        """Return the label decorated with the member's colorizer."""
        return self._color(self._value_)
