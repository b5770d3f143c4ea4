from dataclasses import dataclass, field

from org_tidy.schemas import AnnotationHost
from org_tidy.tidy.registry import DecorationRegistry


@dataclass
class TidySession:
    """Tidy state of one open document: its annotation host and registry."""

    host: AnnotationHost
    registry: DecorationRegistry = field(default_factory=DecorationRegistry)
