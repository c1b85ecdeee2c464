from typing import Dict, Hashable, Iterator, List, Tuple

from static_quadtree.data_structures.node import Leaf


class BackReferenceIndex:
    """Mapping from object identifier to the leaves it was filed into.

    This is the object-to-leaf half of the two-sided object index; the
    leaf-to-object half lives in each ``Leaf.objects``. Both sides are
    updated together through ``file`` and ``unfile`` so that an identifier
    is present here exactly when it is present in every listed leaf.

    The stored leaves are references into the tree, which owns them. The
    index never creates or copies nodes.

    Attributes:
        _refs (dict): Identifier -> ordered list of leaves, one entry per filing.

    Example:
        >>> index = BackReferenceIndex()
        >>> leaf = Leaf((0, 0, 10, 10))
        >>> index.file('a', leaf)
        >>> index.leaves_for('a') == (leaf,)
        True
        >>> index.unfile('a')
        True
        >>> leaf.objects
        []

    """
    def __init__(self):
        self._refs: Dict[Hashable, List[Leaf]] = {}

    def file(self, obj_id: Hashable, leaf: Leaf):
        """Record ``obj_id`` in ``leaf`` and ``leaf`` against ``obj_id``"""
        leaf.file(obj_id)
        self._refs.setdefault(obj_id, []).append(leaf)

    def unfile(self, obj_id: Hashable) -> bool:
        """Remove ``obj_id`` from every leaf it was filed into.
        Returns:
        False when the identifier was never filed (nothing to do)
        """
        leaves = self._refs.pop(obj_id, None)
        if leaves is None:
            return False
        for leaf in leaves:
            leaf.unfile(obj_id)
        return True

    def leaves_for(self, obj_id: Hashable) -> Tuple[Leaf, ...]:
        return tuple(self._refs.get(obj_id, ()))

    def clear(self):
        for obj_id in list(self._refs):
            self.unfile(obj_id)

    def __contains__(self, obj_id: Hashable) -> bool:
        return obj_id in self._refs

    def __len__(self) -> int:
        return len(self._refs)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._refs)
