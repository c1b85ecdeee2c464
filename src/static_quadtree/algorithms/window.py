import logging
from typing import Tuple

import pyarrow as pa
import pyarrow.compute as pc

from static_quadtree.errors import ConfigurationError

logger = logging.getLogger(__name__)


class Window:
    """Cumulative pan/zoom transform applied to caller coordinates.

    Useful when a display is zoomed into a part of the map: once a window is
    set, coordinates handed to the tree are in display units and get mapped
    back onto the map with ``coord' = origin + coord / scale``.

    Each ``set_window`` call composes onto the current view, so repeated
    zooms are relative to what is visible now rather than to the full map.
    The transform only applies while ``scale != 1``; a pure pan at unit
    scale leaves coordinates untouched.

    Attributes:
        origin (tuple): Accumulated (ox, oy) translation in map units.
        scale (float): Accumulated zoom factor, never zero.

    Example:
        >>> window = Window()
        >>> window.set_window(10, 10, 2)
        >>> window.adjust(0, 0, 10, 10)
        (10.0, 10.0, 15.0, 15.0)
        >>> window.reset()
        >>> window.adjust(0, 0, 10, 10)
        (0, 0, 10, 10)

    """
    def __init__(self):
        self.origin = (0, 0)
        self.scale = 1

    @property
    def active(self) -> bool:
        return self.scale != 1

    def set_window(self, sx: float, sy: float, s: float):
        """Pan by (sx, sy) display units, then zoom by s"""
        if s == 0:
            logger.warning("Rejected window with zero scale")
            raise ConfigurationError("window scale must be nonzero", 'scale')
        ox, oy = self.origin
        self.origin = (ox + sx / self.scale, oy + sy / self.scale)
        self.scale *= s
        logger.debug("Window set to origin=%s scale=%s", self.origin, self.scale)

    def reset(self):
        self.origin = (0, 0)
        self.scale = 1
        logger.debug("Window reset")

    def adjust(self, x0: float, y0: float, x1: float, y1: float) -> Tuple[float, float, float, float]:
        if not self.active:
            return (x0, y0, x1, y1)
        ox, oy = self.origin
        return (
            ox + x0 / self.scale,
            oy + y0 / self.scale,
            ox + x1 / self.scale,
            oy + y1 / self.scale,
        )

    def adjust_columns(self, x0, y0, x1, y1) -> tuple:
        """Column-wise ``adjust`` for Arrow arrays.
        Args:
        x0, y0, x1, y1: numeric Arrow arrays or chunked arrays of equal length
        Returns:
        Tuple of four float64 arrays in map units
        """
        columns = tuple(c.cast(pa.float64()) for c in (x0, y0, x1, y1))
        if not self.active:
            return columns
        ox, oy = self.origin
        return tuple(
            pc.add(pc.divide(c, float(self.scale)), float(o))
            for c, o in zip(columns, (ox, oy, ox, oy))
        )
