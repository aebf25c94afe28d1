"""Line-by-line text rewriting used to inject titles and content into templates.

A transform is called once per line and answers with a directive:

* any falsy value such as ``None``, ``""`` or ``False`` (or :data:`PASS`)
  keeps the line as it is,
* a string replaces the line,
* a list or tuple of strings replaces the line with each item in order
  (an empty sequence emits nothing),
* :data:`DELETE` drops the line,
* a :class:`Replace` built directly behaves like a sequence.

Transforms never see other lines, so independent rewrite passes compose.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Sequence, Union

LINE_BREAK = re.compile(r"\n\r|\r\n|\n|\r")


@dataclass(frozen=True, slots=True)
class PassThrough:
    """Keep the original line."""


@dataclass(frozen=True, slots=True)
class Replace:
    """Emit ``lines`` in place of the original line."""

    lines: tuple[str, ...]

    @classmethod
    def of(cls, *lines: str) -> "Replace":
        return cls(lines=tuple(lines))


@dataclass(frozen=True, slots=True)
class Delete:
    """Emit nothing for the original line."""


LineDirective = Union[PassThrough, Replace, Delete]
TransformResult = Union[LineDirective, str, Sequence[str], bool, None]
Transform = Callable[[str], TransformResult]

PASS = PassThrough()
DELETE = Delete()


def lines(text: str) -> list[str]:
    """Split text on ``\\n``, ``\\r``, ``\\r\\n`` or ``\\n\\r``."""
    return LINE_BREAK.split(text)


def as_directive(value: TransformResult) -> LineDirective:
    """Normalize whatever a transform returned into a :data:`LineDirective`."""
    if isinstance(value, (PassThrough, Replace, Delete)):
        return value
    if isinstance(value, (list, tuple)):
        return Replace(lines=tuple(str(item) for item in value))
    if not value:
        return PASS
    if isinstance(value, str):
        return Replace(lines=(value,))
    raise TypeError(f"Unsupported line directive: {value!r}")


def rewrite_lines(source: Sequence[str], transform: Transform) -> list[str]:
    """Apply ``transform`` to every line and collect the emitted lines."""
    result: list[str] = []
    for line in source:
        directive = as_directive(transform(line))
        if isinstance(directive, Delete):
            continue
        if isinstance(directive, Replace):
            result.extend(directive.lines)
        else:
            result.append(line)
    return result


def edit(text: str, transform: Transform) -> str:
    """Rewrite ``text`` line by line and join the result with ``\\n``."""
    return "\n".join(rewrite_lines(lines(text), transform))
