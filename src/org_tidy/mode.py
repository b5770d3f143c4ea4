import logging
from collections.abc import Callable

from org_tidy.buffer import TextBuffer
from org_tidy.config import DEFAULT_CONFIG
from org_tidy.io.org_parser import OrgNode, parse_org
from org_tidy.schemas import StyleConfig
from org_tidy.tidy.decorator import tidy
from org_tidy.tidy.restorer import untidy
from org_tidy.tidy.session import TidySession


class OrgTidyMode:
    """
    Tidy mode for one buffer.

    Enabling tidies the buffer and, if configured, re-tidies before every
    save. Disabling removes every decoration and the save hook.
    """

    def __init__(
        self,
        buffer: TextBuffer,
        config: StyleConfig = DEFAULT_CONFIG,
        parser: Callable[[str], OrgNode] = parse_org,
    ):
        self.buffer = buffer
        self.config = config
        self.parser = parser
        self.session = TidySession(buffer)
        self.enabled = False
        self.tidied = False

    def enable(self) -> None:
        if self.enabled:
            return
        self.enabled = True
        if self.config.tidy_on_save:
            self.buffer.before_save_hooks.append(self.tidy_buffer)
        logging.info(f"org-tidy mode enabled in {self.buffer.name}")
        self.tidy_buffer()

    def disable(self) -> None:
        if not self.enabled:
            return
        self.enabled = False
        if self.tidy_buffer in self.buffer.before_save_hooks:
            self.buffer.before_save_hooks.remove(self.tidy_buffer)
        self.untidy_buffer()
        logging.info(f"org-tidy mode disabled in {self.buffer.name}")

    def tidy_buffer(self) -> None:
        tidy(self.session, self.parser(self.buffer.text), self.config)
        self.tidied = True

    def untidy_buffer(self) -> None:
        untidy(self.session)
        self.tidied = False

    def toggle(self) -> None:
        """Untidy a tidied buffer, tidy an untidied one."""
        if self.tidied:
            self.untidy_buffer()
        else:
            self.tidy_buffer()
