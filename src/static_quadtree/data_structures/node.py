from dataclasses import dataclass, field
from typing import Hashable, Iterator, List, Tuple, Union

Area = Tuple[float, float, float, float]


@dataclass(eq=False)
class Leaf:
    """A cell at the bottom of the tree, the only place objects are filed.

    ``objects`` is a list rather than a set: the same identifier added twice
    is filed twice, and deleting it removes every occurrence.
    Leaves compare by identity so they can serve as back-references.
    """
    area: Area
    objects: List[Hashable] = field(default_factory=list)

    def file(self, obj_id: Hashable):
        self.objects.append(obj_id)

    def unfile(self, obj_id: Hashable):
        self.objects = [o for o in self.objects if o != obj_id]


@dataclass(eq=False)
class Internal:
    """A cell split into four equal quadrants: top left, top right, bottom left, bottom right."""
    area: Area
    children: Tuple['Node', 'Node', 'Node', 'Node']


Node = Union[Leaf, Internal]


def iter_leaves(node: Node) -> Iterator[Leaf]:
    """Yield the leaves under ``node`` depth-first, in quadrant order"""
    if isinstance(node, Leaf):
        yield node
        return
    for child in node.children:
        yield from iter_leaves(child)


def count_nodes(node: Node) -> int:
    if isinstance(node, Leaf):
        return 1
    return 1 + sum(count_nodes(child) for child in node.children)
