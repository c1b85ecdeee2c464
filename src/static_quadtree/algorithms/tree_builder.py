import logging

from static_quadtree.config import QuadTreeConfig
from static_quadtree.data_structures.node import Area, Internal, Leaf, Node

logger = logging.getLogger(__name__)


def build_tree(config: QuadTreeConfig) -> Node:
    """Segment the configured area into a tree of the configured depth.

    Each level splits its cell at the midpoints into four equal quadrants,
    ordered top left, top right, bottom left, bottom right (y grows upward).
    The tree is built once and its shape never changes afterwards.
    """
    root = _add_level(config.area, 1, config.depth)
    logger.info(
        "Built quadtree over %s with depth %d (%d leaves)",
        config.area, config.depth, 4 ** (config.depth - 1)
    )
    return root


def _add_level(area: Area, cur_depth: int, depth: int) -> Node:
    if cur_depth >= depth:
        return Leaf(area)

    xmin, ymin, xmax, ymax = area
    xmid = xmin + (xmax - xmin) / 2
    ymid = ymin + (ymax - ymin) / 2
    quadrants = (
        (xmin, ymid, xmid, ymax), # tl
        (xmid, ymid, xmax, ymax), # tr
        (xmin, ymin, xmid, ymid), # bl
        (xmid, ymin, xmax, ymid), # br
    )
    return Internal(area, tuple(_add_level(q, cur_depth + 1, depth) for q in quadrants))
