import logging
from typing import Hashable, Iterator, List, Mapping, Set, Tuple

import pyarrow as pa
import pyarrow.compute as pc

from static_quadtree.algorithms.tree_builder import build_tree
from static_quadtree.algorithms.window import Window
from static_quadtree.config import QuadTreeConfig
from static_quadtree.data_structures.back_reference import BackReferenceIndex
from static_quadtree.data_structures.node import Area, Leaf, Node, count_nodes, iter_leaves
from static_quadtree.errors import ConfigurationError

logger = logging.getLogger(__name__)

BOX_COLUMNS = ('x0', 'y0', 'x1', 'y1')


class QuadTree:
    """Static-depth quadtree over axis-aligned bounding boxes.

    The area given at construction is segmented once into a tree of fixed
    depth. Objects are filed, by identifier, into every leaf their bounding
    box overlaps, and a back-reference index remembers those leaves so that
    deletion never has to walk the tree. Region queries walk the tree
    pruning cells that do not overlap the region and return the identifiers
    found in the surviving leaves.

    Query results are candidates: every returned object overlaps a cell
    that overlaps the region, not necessarily the region itself. Checking
    exact overlap is left to the caller.

    Insertion treats a box touching a cell boundary as overlapping it, while
    queries do not. A query whose edge lies exactly on a cell boundary
    therefore skips the neighbouring cell.

    Args:
    xmin, ymin: bottom left corner of the mapped area
    xmax, ymax: top right corner of the mapped area
    depth: number of levels, root included (depth 1 is a single leaf)

    Raises:
        ConfigurationError: If a parameter is missing or depth is not a positive integer.

    Example:
        >>> qt = QuadTree(xmin=0, ymin=0, xmax=100, ymax=100, depth=2)
        >>> qt.add('a', 10, 10, 20, 20)
        >>> qt.get_enclosed_objects(0, 0, 49, 49)
        {'a'}
        >>> qt.delete('a')
        >>> qt.get_enclosed_objects(0, 0, 49, 49)
        set()

    """
    def __init__(self, xmin: float = None, ymin: float = None,
                 xmax: float = None, ymax: float = None, depth: int = None):
        self.config = QuadTreeConfig(xmin, ymin, xmax, ymax, depth)
        self.root: Node = build_tree(self.config)
        self.window = Window()
        self._backref = BackReferenceIndex()

    @classmethod
    def from_config(cls, config: QuadTreeConfig) -> 'QuadTree':
        return cls(config.xmin, config.ymin, config.xmax, config.ymax, config.depth)

    @classmethod
    def from_mapping(cls, options: Mapping) -> 'QuadTree':
        """Build from ``{'-xmin': ..., '-depth': ...}`` style options"""
        return cls.from_config(QuadTreeConfig.from_mapping(options))

    @property
    def depth(self) -> int:
        return self.config.depth

    @property
    def area(self) -> Area:
        return self.config.area

    # ------------------------------------------------------------------
    # Insertion / deletion
    # ------------------------------------------------------------------

    def add(self, obj_id: Hashable, x0: float, y0: float, x1: float, y1: float):
        """Add an object to every leaf its bounding box overlaps.

        The identifier is assumed to be unique; adding it again files it
        again instead of replacing the earlier entry. Corners may be given
        in any order.
        """
        x0, y0, x1, y1 = self.window.adjust(x0, y0, x1, y1)
        if x1 < x0:
            x0, x1 = x1, x0
        if y1 < y0:
            y0, y1 = y1, y0
        self._add_obj_to_child(self.root, obj_id, (x0, y0, x1, y1))
        logger.debug("Added %r at %s", obj_id, (x0, y0, x1, y1))

    def _add_obj_to_child(self, current: Node, obj_id: Hashable, box: Area):
        cxmin, cymin, cxmax, cymax = current.area
        xmin, ymin, xmax, ymax = box
        if xmin > cxmax or xmax < cxmin or ymin > cymax or ymax < cymin:
            return

        if isinstance(current, Leaf):
            self._backref.file(obj_id, current)
            return
        for child in current.children:
            self._add_obj_to_child(child, obj_id, box)

    def add_batch(self, table) -> int:
        """Add many objects at once.
        Args:
        table: pyarrow.Table (or anything pa.table accepts) with columns id, x0, y0, x1, y1
        Returns:
        Number of rows filed, in table order
        """
        table = _as_table(table, ('id',) + BOX_COLUMNS)
        x0, y0, x1, y1 = self.window.adjust_columns(*(table[c] for c in BOX_COLUMNS))
        boxes = zip(
            pc.min_element_wise(x0, x1).to_pylist(),
            pc.min_element_wise(y0, y1).to_pylist(),
            pc.max_element_wise(x0, x1).to_pylist(),
            pc.max_element_wise(y0, y1).to_pylist(),
        )
        for obj_id, box in zip(table['id'].to_pylist(), boxes):
            self._add_obj_to_child(self.root, obj_id, box)
        logger.debug("Added batch of %d objects", table.num_rows)
        return table.num_rows

    def delete(self, obj_id: Hashable):
        """Remove an object from the tree; unknown identifiers are ignored"""
        if self._backref.unfile(obj_id):
            logger.debug("Deleted %r", obj_id)

    def clear(self):
        """Remove every object, keeping the tree shape and the window"""
        self._backref.clear()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_enclosed_objects(self, x0: float, y0: float, x1: float, y1: float) -> Set[Hashable]:
        """Return the objects filed in leaves that overlap the given area.

        Unlike ``add``, corners are not reordered: ``x0, y0`` must be the
        minimum corner and ``x1, y1`` the maximum one.
        """
        box = self.window.adjust(x0, y0, x1, y1)
        results: List[Hashable] = []
        self._check_overlap(self.root, results, box)
        return set(results)

    def _check_overlap(self, current: Node, results: List[Hashable], box: Area):
        cxmin, cymin, cxmax, cymax = current.area
        xmin, ymin, xmax, ymax = box
        if xmin >= cxmax or xmax <= cxmin or ymin >= cymax or ymax <= cymin:
            return

        if isinstance(current, Leaf):
            results.extend(current.objects)
            return
        for child in current.children:
            self._check_overlap(child, results, box)

    def query_batch(self, table) -> pa.Table:
        """Run one region query per row.
        Args:
        table: pyarrow.Table (or anything pa.table accepts) with columns x0, y0, x1, y1
        Returns:
        Arrow Table with the transformed query box and an ``objects`` list column
        """
        table = _as_table(table, BOX_COLUMNS)
        columns = self.window.adjust_columns(*(table[c] for c in BOX_COLUMNS))
        found = []
        for box in zip(*(c.to_pylist() for c in columns)):
            results: List[Hashable] = []
            self._check_overlap(self.root, results, box)
            found.append(sorted(set(results), key=str))
        return pa.table(dict(zip(BOX_COLUMNS, columns), objects=_objects_column(found)))

    # ------------------------------------------------------------------
    # Window
    # ------------------------------------------------------------------

    def set_window(self, sx: float, sy: float, s: float):
        """Pan and zoom the coordinate window relative to the current one.

        Subsequent ``add`` and ``get_enclosed_objects`` calls map their
        coordinates through the window. Objects already filed are unaffected.
        """
        self.window.set_window(sx, sy, s)

    def reset_window(self):
        self.window.reset()

    getEnclosedObjects = get_enclosed_objects
    setWindow = set_window
    resetWindow = reset_window

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def leaves(self) -> Iterator[Leaf]:
        return iter_leaves(self.root)

    def node_count(self) -> int:
        return count_nodes(self.root)

    def leaves_for(self, obj_id: Hashable) -> Tuple[Leaf, ...]:
        """Leaves ``obj_id`` was filed into, one entry per filing"""
        return self._backref.leaves_for(obj_id)

    def leaves_table(self) -> pa.Table:
        """Arrow Table with one row per leaf: its area, object count and objects"""
        leaves = list(self.leaves())
        names = ('xmin', 'ymin', 'xmax', 'ymax')
        data = {
            name: pa.array([float(leaf.area[i]) for leaf in leaves], pa.float64())
            for i, name in enumerate(names)
        }
        data['count'] = pa.array([len(leaf.objects) for leaf in leaves], pa.int64())
        data['objects'] = _objects_column([list(leaf.objects) for leaf in leaves])
        return pa.table(data)

    def __contains__(self, obj_id: Hashable) -> bool:
        return obj_id in self._backref

    def __len__(self) -> int:
        return len(self._backref)

    def __repr__(self) -> str:
        return f"QuadTree(area={self.area}, depth={self.depth}, objects={len(self)})"


def _as_table(data, required: tuple) -> pa.Table:
    table = data if isinstance(data, pa.Table) else pa.table(data)
    missing = [c for c in required if c not in table.column_names]
    if missing:
        raise ConfigurationError(f"missing columns: {', '.join(missing)}", missing[0])
    for name in required:
        if name != 'id' and table[name].null_count:
            raise ConfigurationError(f"column {name} contains nulls", name)
    return table


def _objects_column(lists: list) -> pa.Array:
    """List column of identifiers, falling back to their string form
    when Arrow cannot infer one type for all of them (e.g. mixed int/str ids)
    """
    try:
        return pa.array(lists)
    except (pa.ArrowInvalid, pa.ArrowTypeError):
        return pa.array([[str(o) for o in ids] for ids in lists], pa.list_(pa.string()))
