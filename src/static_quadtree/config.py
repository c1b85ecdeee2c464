import logging
import numbers
from dataclasses import dataclass
from typing import Mapping

from static_quadtree.errors import ConfigurationError

logger = logging.getLogger(__name__)

BOUND_NAMES = ('xmin', 'ymin', 'xmax', 'ymax')
PARAMETER_NAMES = BOUND_NAMES + ('depth',)


@dataclass(frozen=True)
class QuadTreeConfig:
    """Construction parameters for a static-depth quadtree.

    All five parameters are mandatory. The bounds describe the root area
    (bottom left corner ``xmin, ymin`` and top right corner ``xmax, ymax``)
    and ``depth`` is the number of levels from the root down to the leaves,
    so a depth of 1 is a tree made of a single leaf.

    Attributes:
        xmin (float): X-coordinate of the bottom left corner.
        ymin (float): Y-coordinate of the bottom left corner.
        xmax (float): X-coordinate of the top right corner.
        ymax (float): Y-coordinate of the top right corner.
        depth (int): Depth of the tree, a positive integer.

    Example:
        >>> config = QuadTreeConfig.from_mapping({'-xmin': 0, '-ymin': 0,
        ...                                       '-xmax': 1000, '-ymax': 1000,
        ...                                       '-depth': 6})
        >>> config.area
        (0, 0, 1000, 1000)

    """
    xmin: float
    ymin: float
    xmax: float
    ymax: float
    depth: int

    def __post_init__(self):
        for name in BOUND_NAMES:
            value = getattr(self, name)
            if value is None:
                _fail(f"must specify {name}", name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                _fail(f"{name} must be a real number, got {value!r}", name)

        if self.depth is None:
            _fail("must specify depth", 'depth')
        if isinstance(self.depth, bool) or not isinstance(self.depth, numbers.Integral):
            _fail(f"depth must be an integer, got {self.depth!r}", 'depth')
        if self.depth < 1:
            _fail(f"depth must be positive, got {self.depth}", 'depth')

    @property
    def area(self) -> tuple:
        return (self.xmin, self.ymin, self.xmax, self.ymax)

    @classmethod
    def from_mapping(cls, options: Mapping) -> 'QuadTreeConfig':
        """Build a config from a mapping of options.

        Keys may be given plain (``xmin``) or dash-prefixed (``-xmin``).
        Unknown keys are ignored.
        """
        values = {}
        for name in PARAMETER_NAMES:
            if name in options:
                values[name] = options[name]
            elif f"-{name}" in options:
                values[name] = options[f"-{name}"]
            else:
                _fail(f"must specify {name}", name)
        return cls(**values)


def _fail(message: str, parameter: str):
    logger.warning("Invalid quadtree configuration: %s", message)
    raise ConfigurationError(message, parameter)
