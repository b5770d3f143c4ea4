"""
In-memory text buffer with annotation (overlay) primitives.

Annotations never change the text. They either override how a span is
rendered or intercept edit commands touching the span. Offsets of live
annotations follow the text through edits the way editor overlays do.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from itertools import count

from org_tidy.schemas import (
    EditCommand,
    HideAsEmpty,
    InputIntercept,
    RenderSpec,
    ReplaceWithGlyph,
    SideMarker,
)


class EditError(Exception):
    """An edit command could not be carried out."""


class ProtectedRegionError(EditError):
    """An edit command was refused because it touches a protected character."""


class AnnotationError(KeyError):
    """The annotation is not attached to this buffer."""


@dataclass(eq=False)
class Annotation:
    id: int
    start: int
    end: int
    render: RenderSpec
    attached: bool = field(default=True, repr=False)

    def covers(self, pos: int) -> bool:
        return self.start <= pos < self.end


class TextBuffer:
    def __init__(self, text: str = "", name: str = "*scratch*"):
        self.name = name
        self._text = text
        self._annotations: dict[int, Annotation] = {}
        self._ids = count(1)
        self.before_save_hooks: list[Callable[[], None]] = []
        self.saved_text: str | None = None

    def __repr__(self) -> str:
        return f"TextBuffer(name={self.name!r}, length={len(self._text)})"

    @property
    def text(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    # Annotation primitives

    def create_annotation(self, start: int, end: int, render: RenderSpec) -> Annotation:
        if not 0 <= start <= end <= len(self._text):
            raise EditError(
                f"Span ({start}, {end}) outside buffer of length {len(self._text)}"
            )
        annotation = Annotation(next(self._ids), start, end, render)
        self._annotations[annotation.id] = annotation
        return annotation

    def remove_annotation(self, handle: Annotation) -> None:
        if self._annotations.get(handle.id) is not handle:
            raise AnnotationError(handle.id)
        del self._annotations[handle.id]
        handle.attached = False

    @property
    def annotations(self) -> list[Annotation]:
        return sorted(self._annotations.values(), key=lambda a: (a.start, a.id))

    def annotations_at(self, pos: int) -> list[Annotation]:
        return [a for a in self.annotations if a.covers(pos)]

    # Edit commands

    def insert(self, pos: int, s: str) -> None:
        if not 0 <= pos <= len(self._text):
            raise EditError(f"Position {pos} outside buffer")
        self._text = self._text[:pos] + s + self._text[pos:]
        n = len(s)
        for a in self._annotations.values():
            # text inserted at the start is inside, at the end outside
            if a.start > pos:
                a.start += n
            if a.end > pos:
                a.end += n

    def delete_char(self, point: int) -> None:
        """Delete the character after `point`."""
        if point >= len(self._text):
            raise EditError("End of buffer")
        self._check_intercept("delete-char", point)
        self._delete(point, point + 1)

    def delete_backward_char(self, point: int) -> None:
        """Delete the character before `point`."""
        if point <= 0:
            raise EditError("Beginning of buffer")
        self._check_intercept("delete-backward-char", point - 1)
        self._delete(point - 1, point)

    def _check_intercept(self, command: EditCommand, pos: int) -> None:
        for a in self._annotations.values():
            if (
                isinstance(a.render, InputIntercept)
                and a.render.command == command
                and a.covers(pos)
            ):
                logging.debug("%s refused at %d in %s", command, pos, self.name)
                raise ProtectedRegionError(a.render.message)

    def _delete(self, start: int, end: int) -> None:
        self._text = self._text[:start] + self._text[end:]
        n = end - start
        for a in self._annotations.values():
            if a.start >= end:
                a.start -= n
            elif a.start > start:
                a.start = start
            if a.end >= end:
                a.end -= n
            elif a.end > start:
                a.end = start

    # Display

    def _render(self) -> tuple[str, list[tuple[int, str]]]:
        parts: list[str] = []
        fringe: list[tuple[int, str]] = []
        lines_so_far = 0
        cursor = 0
        for a in self.annotations:
            if isinstance(a.render, InputIntercept) or a.start < cursor:
                continue
            chunk = self._text[cursor : a.start]
            parts.append(chunk)
            lines_so_far += chunk.count("\n")
            if isinstance(a.render, ReplaceWithGlyph):
                parts.append(a.render.text)
                lines_so_far += a.render.text.count("\n")
            elif isinstance(a.render, SideMarker):
                fringe.append((lines_so_far, a.render.bitmap))
            elif not isinstance(a.render, HideAsEmpty):
                raise TypeError(f"Unknown render spec {a.render!r}")
            cursor = a.end
        parts.append(self._text[cursor:])
        return "".join(parts), fringe

    def render(self) -> str:
        """Text as displayed, with hidden and replaced spans applied."""
        return self._render()[0]

    def fringe_markers(self) -> list[tuple[int, str]]:
        """(display line, bitmap) for every side marker."""
        return self._render()[1]

    # Saving

    def save(self) -> str:
        for hook in list(self.before_save_hooks):
            hook()
        self.saved_text = self._text
        logging.info(f"Saved {self.name} ({len(self._text)} characters)")
        return self.saved_text
