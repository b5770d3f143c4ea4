import logging

from org_tidy.io.org_parser import OrgNode
from org_tidy.schemas import DecorationRecord, InputIntercept, Region, StyleConfig
from org_tidy.tidy.locator import locate_regions
from org_tidy.tidy.session import TidySession
from org_tidy.tidy.styles import StyleAction, render_spec_for, resolve_style


def overlay_span(region: Region) -> tuple[int, int]:
    """
    Span covered by the visual annotation of `region`.

    Drawers below a headline are shifted one character to the left so the
    newline ending the headline is hidden with them and the drawer's own final
    newline stays visible.
    """
    if region.is_topmost:
        return 0, region.end
    return region.start - 1, region.end - 1


def guard_spans(region: Region) -> tuple[tuple[int, int], tuple[int, int]]:
    """(backspace span, delete span) protecting the edges of `region`."""
    del_beg = max(0, region.start - 1)
    return (region.end - 1, region.end), (del_beg, del_beg + 1)


def tidy_region(session: TidySession, region: Region, config: StyleConfig) -> bool:
    """Decorate a single region. Returns False when nothing was created."""
    span = overlay_span(region)
    if session.registry.exists(span):
        return False

    decision = resolve_style(region.is_topmost, config.top_style, config.general_style)
    if decision.action is StyleAction.NO_OP:
        return False

    host, registry = session.host, session.registry
    render = render_spec_for(decision.action, config)
    handle = host.create_annotation(*span, render)
    registry.add(DecorationRecord("visual", span, handle, region))

    if decision.guard_boundaries and config.protect_boundaries:
        backspace_span, delete_span = guard_spans(region)
        for guard_span, command in (
            (backspace_span, "delete-backward-char"),
            (delete_span, "delete-char"),
        ):
            guard = host.create_annotation(*guard_span, InputIntercept(command))
            registry.add(DecorationRecord("boundary-guard", guard_span, guard, region))
    return True


def tidy(session: TidySession, tree: OrgNode, config: StyleConfig) -> None:
    """Decorate every drawer in `tree` not already decorated in `session`."""
    tidied = sum(
        tidy_region(session, region, config)
        for region in locate_regions(tree, config)
    )
    logging.debug(
        "Tidied %d new regions, %d records registered", tidied, len(session.registry)
    )
