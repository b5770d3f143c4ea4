from dataclasses import dataclass
from typing import Literal, Optional, Protocol, Union

from pydantic import BaseModel, ConfigDict, field_validator

TopStyle = Literal["invisible", "keep"]
GeneralStyle = Literal["fringe-marker", "inline-symbol", "invisible"]
EditCommand = Literal["delete-backward-char", "delete-char"]
RecordKind = Literal["visual", "boundary-guard"]

PROPERTY_DRAWER = "property-drawer"
DRAWER = "drawer"


class StyleConfig(BaseModel):
    """How tidied drawers are displayed.

    The top style applies to the drawer starting at the very first character of
    the document; the general style applies to every other drawer.
    """

    model_config = ConfigDict(frozen=True)

    top_style: TopStyle = "invisible"
    general_style: GeneralStyle = "fringe-marker"
    inline_symbol: str = "♯"
    fringe_bitmap: str = "org-tidy-fringe"
    protect_boundaries: bool = True
    tidy_on_save: bool = True
    general_drawers: bool = False
    drawer_whitelist: tuple[str, ...] = ()
    drawer_blacklist: tuple[str, ...] = ()

    @field_validator("inline_symbol")
    @classmethod
    def single_line_symbol(cls, v: str) -> str:
        if "\n" in v:
            raise ValueError("inline_symbol must not contain a newline")
        return v

    @field_validator("drawer_whitelist", "drawer_blacklist", mode="before")
    @classmethod
    def normalize_names(cls, v: Union[str, list[str], tuple[str, ...], None]):
        """Accept a single name or a list; store upper-cased names."""
        if v is None:
            return ()
        if isinstance(v, str):
            v = [v]
        return tuple(name.upper() for name in v)


@dataclass(frozen=True)
class Region:
    """A drawer located in a parsed document."""

    start: int
    end: int
    is_topmost: bool
    kind: str = PROPERTY_DRAWER
    name: str = "PROPERTIES"


# Render specs understood by the annotation host


@dataclass(frozen=True)
class HideAsEmpty:
    pass


@dataclass(frozen=True)
class ReplaceWithGlyph:
    text: str


@dataclass(frozen=True)
class SideMarker:
    bitmap: str


@dataclass(frozen=True)
class InputIntercept:
    command: EditCommand
    message: str = "Property drawer is protected in org-tidy mode"


RenderSpec = Union[HideAsEmpty, ReplaceWithGlyph, SideMarker, InputIntercept]


class AnnotationHandle(Protocol):
    """What the engine needs to know about an annotation it created."""

    start: int
    end: int
    render: RenderSpec


class AnnotationHost(Protocol):
    """Annotation primitives of the host text buffer."""

    def create_annotation(
        self, start: int, end: int, render: RenderSpec
    ) -> AnnotationHandle:
        """Attach a rendering override or input interception to [start, end)."""
        ...

    def remove_annotation(self, handle: AnnotationHandle) -> None:
        """Detach an annotation previously returned by create_annotation."""
        ...


@dataclass(frozen=True)
class DecorationRecord:
    """One annotation created by the tidy engine.

    `span` is the span at creation time; the live annotation may have moved
    since then if the text was edited.
    """

    kind: RecordKind
    span: tuple[int, int]
    handle: AnnotationHandle
    region: Optional[Region] = None
