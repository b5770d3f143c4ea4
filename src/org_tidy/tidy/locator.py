from collections.abc import Iterator
from dataclasses import dataclass

from org_tidy.io.org_parser import OrgNode, map_nodes
from org_tidy.schemas import DRAWER, PROPERTY_DRAWER, Region, StyleConfig


def drawer_name_allowed(name: str, config: StyleConfig) -> bool:
    """Apply the general-drawer whitelist, then the blacklist."""
    name = name.upper()
    if config.drawer_whitelist and name not in config.drawer_whitelist:
        return False
    return name not in config.drawer_blacklist


@dataclass(frozen=True)
class RegionLocator:
    """
    Restartable sequence of the drawers in a parsed tree, in document order.

    Every iteration walks the tree again, so a locator can be consumed more
    than once.
    """

    tree: OrgNode
    general_drawers: bool = False
    config: StyleConfig | None = None

    def __iter__(self) -> Iterator[Region]:
        kinds = (PROPERTY_DRAWER, DRAWER) if self.general_drawers else PROPERTY_DRAWER
        for node in map_nodes(self.tree, kinds):
            if node.kind == DRAWER and self.config is not None:
                if not drawer_name_allowed(node.name or "", self.config):
                    continue
            yield Region(
                start=node.begin,
                end=node.end,
                is_topmost=node.begin == 0,
                kind=node.kind,
                name=node.name or "",
            )


def locate_regions(tree: OrgNode, config: StyleConfig | None = None) -> RegionLocator:
    if config is None:
        return RegionLocator(tree)
    return RegionLocator(tree, general_drawers=config.general_drawers, config=config)
