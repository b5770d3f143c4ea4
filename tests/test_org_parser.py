import pytest

from org_tidy.io.org_parser import map_nodes, parse_org


def spans(tree, kinds="property-drawer"):
    return [(n.begin, n.end) for n in map_nodes(tree, kinds)]


def test_top_and_heading_drawers(notes_org):
    tree = parse_org(notes_org)
    assert spans(tree) == [(0, 28), (54, 82)]
    assert tree.properties == {"ID": "top"}
    headline = next(map_nodes(tree, "headline"))
    assert headline.name == "Heading"
    assert headline.properties == {"ID": "abc"}
    assert notes_org[54:82] == ":PROPERTIES:\n:ID: abc\n:END:\n"


def test_drawer_end_includes_blank_lines():
    text = "* H\n:PROPERTIES:\n:END:\n\n\nText\n"
    assert spans(parse_org(text)) == [(4, 25)]


def test_drawer_after_planning_line():
    text = "* TODO Task\nSCHEDULED: <2024-01-01 Mon>\n:PROPERTIES:\n:ID: x\n:END:\n"
    begin = text.index(":PROPERTIES:")
    assert spans(parse_org(text)) == [(begin, len(text))]


def test_unclosed_drawer_is_text():
    tree = parse_org("* H\n:PROPERTIES:\n:ID: x\n\n* Next\n")
    assert spans(tree, ("property-drawer", "drawer")) == []


def test_properties_in_body_is_general_drawer():
    text = "* H\nSome text.\n:PROPERTIES:\n:ID: x\n:END:\n"
    tree = parse_org(text)
    assert spans(tree) == []
    drawers = list(map_nodes(tree, "drawer"))
    assert [(d.name, d.begin) for d in drawers] == [("PROPERTIES", 15)]


def test_logbook_drawer():
    text = "* H\n:PROPERTIES:\n:END:\n:LOGBOOK:\n- Note taken\n:END:\n"
    tree = parse_org(text)
    assert [(n.kind, n.name) for n in map_nodes(tree, ("property-drawer", "drawer"))] == [
        ("property-drawer", "PROPERTIES"),
        ("drawer", "LOGBOOK"),
    ]


def test_top_drawer_after_comment_is_not_topmost():
    text = "# -*- mode: org -*-\n:PROPERTIES:\n:ID: x\n:END:\n"
    assert spans(parse_org(text)) == [(20, len(text))]


def test_properties_after_content_is_not_top_drawer():
    text = "Intro.\n:PROPERTIES:\n:ID: x\n:END:\n"
    tree = parse_org(text)
    assert spans(tree) == []
    assert tree.properties == {}


@pytest.mark.parametrize("text", ["", "\n\n", "Just a paragraph.\n", "* Heading\n"])
def test_documents_without_drawers(text):
    assert spans(parse_org(text), ("property-drawer", "drawer")) == []


def test_headline_nesting_and_ends():
    text = "* A\n** B\n* C\n"
    tree = parse_org(text)
    a, c = tree.children
    (b,) = a.children
    assert (a.begin, a.end) == (0, 9)
    assert (b.begin, b.end, b.level) == (4, 9, 2)
    assert (c.begin, c.end) == (9, len(text))
    assert [n.name for n in map_nodes(tree, "headline")] == ["A", "B", "C"]


def test_missing_final_newline():
    text = "* H\n:PROPERTIES:\n:END:"
    assert spans(parse_org(text)) == [(4, len(text))]


@pytest.mark.parametrize("line", ["*", "**", "*bold* text", "*\t"])
def test_stars_without_space_are_not_headlines(line):
    tree = parse_org(f"{line}\n:PROPERTIES:\n:ID: x\n:END:\n")
    assert list(map_nodes(tree, "headline")) == []
    # the drawer is an ordinary drawer after a paragraph line
    assert spans(tree) == []
    assert [n.name for n in map_nodes(tree, "drawer")] == ["PROPERTIES"]


def test_headline_with_empty_title():
    tree = parse_org("* \n:PROPERTIES:\n:END:\n")
    (headline,) = map_nodes(tree, "headline")
    assert headline.name == ""
    assert spans(tree) == [(3, 22)]
