from static_quadtree.algorithms.quad_tree import QuadTree
from static_quadtree.algorithms.window import Window
from static_quadtree.config import QuadTreeConfig
from static_quadtree.errors import ConfigurationError, QuadTreeError

__all__ = ['QuadTree', 'Window', 'QuadTreeConfig', 'ConfigurationError', 'QuadTreeError']
