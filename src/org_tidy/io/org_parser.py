"""
Line-oriented Org parser producing a node tree with character offsets.

Only the structure needed for tidying is recognised: headlines, property
drawers and general drawers. Offsets follow org-element conventions: `begin`
is the first character of the element, `end` is exclusive and includes any
blank lines following it.
"""

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from org_tidy.schemas import DRAWER, PROPERTY_DRAWER

ORG_DATA = "org-data"
HEADLINE = "headline"

HEADLINE_RE = re.compile(r"^(\*+) [ \t]*(.*?)[ \t]*$")
PLANNING_RE = re.compile(r"^[ \t]*(?:SCHEDULED|DEADLINE|CLOSED):")
PROPERTIES_BEGIN_RE = re.compile(r"^[ \t]*:PROPERTIES:[ \t]*$", re.IGNORECASE)
DRAWER_BEGIN_RE = re.compile(r"^[ \t]*:([\w-]+):[ \t]*$")
DRAWER_END_RE = re.compile(r"^[ \t]*:END:[ \t]*$", re.IGNORECASE)
PROPERTY_RE = re.compile(r"^[ \t]*:(\S+?):(?:[ \t]+(.*?))?[ \t]*$")
COMMENT_RE = re.compile(r"^[ \t]*#(?:[ \t]|$)")


@dataclass
class OrgNode:
    kind: str
    begin: int
    end: int
    name: str | None = None
    level: int = 0
    properties: dict[str, str] = field(default_factory=dict)
    children: list["OrgNode"] = field(default_factory=list)


@dataclass
class _Line:
    begin: int
    end: int  # after the newline, if any
    content: str

    @property
    def blank(self) -> bool:
        return not self.content.strip()


def _split_lines(text: str) -> list[_Line]:
    lines: list[_Line] = []
    pos = 0
    while pos < len(text):
        nl = text.find("\n", pos)
        end = len(text) if nl == -1 else nl + 1
        lines.append(_Line(pos, end, text[pos : nl if nl != -1 else end]))
        pos = end
    return lines


def _read_drawer(
    lines: list[_Line], i: int, kind: str, name: str
) -> tuple[OrgNode | None, int]:
    """
    Read a drawer opening at line `i`.

    Returns (node, index of the first line after the drawer), or (None, i) when
    the drawer is never closed.
    """
    j = i + 1
    while j < len(lines):
        content = lines[j].content
        if DRAWER_END_RE.match(content):
            break
        if HEADLINE_RE.match(content):
            return None, i
        j += 1
    else:
        return None, i

    properties: dict[str, str] = {}
    if kind == PROPERTY_DRAWER:
        for line in lines[i + 1 : j]:
            m = PROPERTY_RE.match(line.content)
            if m:
                properties[m.group(1)] = m.group(2) or ""

    end = lines[j].end
    j += 1
    # post-blank lines belong to the drawer
    while j < len(lines) and lines[j].blank:
        end = lines[j].end
        j += 1

    return OrgNode(kind, lines[i].begin, end, name=name, properties=properties), j


def parse_org(text: str) -> OrgNode:
    """
    Parse Org `text` into a tree rooted at an ``org-data`` node.

    >>> tree = parse_org("* A\\n:PROPERTIES:\\n:ID: 1\\n:END:\\n")
    >>> [(n.kind, n.begin, n.end) for n in map_nodes(tree, PROPERTY_DRAWER)]
    [('property-drawer', 4, 30)]
    """
    lines = _split_lines(text)
    root = OrgNode(ORG_DATA, 0, len(text))
    stack: list[OrgNode] = [root]
    # a document-level property drawer may only follow blank lines and comments
    top_drawer_allowed = True

    i = 0
    while i < len(lines):
        line = lines[i]

        m = HEADLINE_RE.match(line.content)
        if m:
            top_drawer_allowed = False
            level = len(m.group(1))
            while stack[-1].kind == HEADLINE and stack[-1].level >= level:
                stack.pop().end = line.begin
            headline = OrgNode(
                HEADLINE, line.begin, len(text), name=m.group(2) or "", level=level
            )
            stack[-1].children.append(headline)
            stack.append(headline)
            i += 1

            if i < len(lines) and PLANNING_RE.match(lines[i].content):
                i += 1
            if i < len(lines) and PROPERTIES_BEGIN_RE.match(lines[i].content):
                drawer, i_next = _read_drawer(lines, i, PROPERTY_DRAWER, "PROPERTIES")
                if drawer is not None:
                    headline.children.append(drawer)
                    headline.properties = drawer.properties
                    i = i_next
            continue

        if top_drawer_allowed and PROPERTIES_BEGIN_RE.match(line.content):
            top_drawer_allowed = False
            drawer, i_next = _read_drawer(lines, i, PROPERTY_DRAWER, "PROPERTIES")
            if drawer is not None:
                root.children.append(drawer)
                root.properties = drawer.properties
                i = i_next
                continue

        m = DRAWER_BEGIN_RE.match(line.content)
        if m and m.group(1).upper() != "END":
            drawer, i_next = _read_drawer(lines, i, DRAWER, m.group(1).upper())
            if drawer is not None:
                stack[-1].children.append(drawer)
                top_drawer_allowed = False
                i = i_next
                continue

        if not (line.blank or COMMENT_RE.match(line.content)):
            top_drawer_allowed = False
        i += 1

    logging.debug(
        "Parsed org text: %d characters, %d lines", len(text), len(lines)
    )
    return root


def map_nodes(tree: OrgNode, kinds: str | Iterable[str]) -> Iterator[OrgNode]:
    """Yield every node of the given kind(s) in document order."""
    wanted = {kinds} if isinstance(kinds, str) else set(kinds)
    if tree.kind in wanted:
        yield tree
    for child in tree.children:
        yield from map_nodes(child, wanted)
