from org_tidy.buffer import TextBuffer
from org_tidy.config import DEFAULT_CONFIG
from org_tidy.mode import OrgTidyMode
from org_tidy.schemas import StyleConfig


def tidy_text(text: str, config: StyleConfig = DEFAULT_CONFIG, **kwargs) -> OrgTidyMode:
    """
    Open `text` in a new buffer and enable tidy mode in it.

    Extra keyword arguments override fields of `config`.
    """
    if kwargs:
        config = StyleConfig(**{**config.model_dump(), **kwargs})
    mode = OrgTidyMode(TextBuffer(text), config)
    mode.enable()
    return mode
