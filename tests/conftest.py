import pytest

from org_tidy.buffer import TextBuffer
from org_tidy.io.org_parser import OrgNode
from org_tidy.schemas import StyleConfig
from org_tidy.tidy.session import TidySession

# Offsets:
#   top drawer        [0, 28)
#   "* Heading" line  [44, 54)
#   heading drawer    [54, 82)
#   "Body text." line [82, 93)
NOTES_ORG = (
    ":PROPERTIES:\n"
    ":ID: top\n"
    ":END:\n"
    "#+title: Notes\n"
    "\n"
    "* Heading\n"
    ":PROPERTIES:\n"
    ":ID: abc\n"
    ":END:\n"
    "Body text.\n"
)


@pytest.fixture
def notes_org():
    return NOTES_ORG


@pytest.fixture
def notes_buffer():
    return TextBuffer(NOTES_ORG, name="notes.org")


@pytest.fixture
def synthetic_tree():
    """A topmost drawer at [0, 40) and a heading drawer at [100, 130)."""
    return OrgNode(
        "org-data",
        0,
        200,
        children=[
            OrgNode("property-drawer", 0, 40, name="PROPERTIES"),
            OrgNode(
                "headline",
                90,
                200,
                name="Heading",
                level=1,
                children=[OrgNode("property-drawer", 100, 130, name="PROPERTIES")],
            ),
        ],
    )


@pytest.fixture
def heading_only_tree():
    """Only the heading drawer at [100, 130)."""
    return OrgNode(
        "org-data",
        0,
        200,
        children=[
            OrgNode(
                "headline",
                90,
                200,
                level=1,
                children=[OrgNode("property-drawer", 100, 130, name="PROPERTIES")],
            )
        ],
    )


@pytest.fixture
def synthetic_buffer():
    return TextBuffer("".join(chr(ord("a") + i % 26) for i in range(200)))


@pytest.fixture
def session(synthetic_buffer):
    return TidySession(synthetic_buffer)


ALL_STYLES = [
    StyleConfig(top_style=top, general_style=general)
    for top in ("invisible", "keep")
    for general in ("fringe-marker", "inline-symbol", "invisible")
]


@pytest.fixture(
    params=ALL_STYLES, ids=lambda c: f"{c.top_style}/{c.general_style}"
)
def style_config(request):
    return request.param
