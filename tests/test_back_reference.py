import pytest

from static_quadtree.data_structures.back_reference import BackReferenceIndex
from static_quadtree.data_structures.node import Leaf


class TestBackReferenceIndex:
    def test_file_updates_both_sides(self):
        index = BackReferenceIndex()
        left, right = Leaf((0, 0, 5, 10)), Leaf((5, 0, 10, 10))
        index.file("a", left)
        index.file("a", right)

        assert index.leaves_for("a") == (left, right)
        assert left.objects == ["a"]
        assert right.objects == ["a"]
        assert "a" in index
        assert len(index) == 1

    def test_unfile_removes_every_occurrence(self):
        index = BackReferenceIndex()
        leaf = Leaf((0, 0, 1, 1))
        index.file("a", leaf)
        index.file("b", leaf)
        index.file("a", leaf)

        assert index.unfile("a")
        assert leaf.objects == ["b"]
        assert "a" not in index
        assert index.leaves_for("a") == ()

    def test_unfile_unknown_is_noop(self):
        index = BackReferenceIndex()
        assert not index.unfile("ghost")

    def test_leaves_compare_by_identity(self):
        first, second = Leaf((0, 0, 1, 1)), Leaf((0, 0, 1, 1))
        assert first != second
        index = BackReferenceIndex()
        index.file(1, first)
        assert second not in index.leaves_for(1)

    def test_clear(self):
        index = BackReferenceIndex()
        leaves = [Leaf((i, 0, i + 1, 1)) for i in range(3)]
        for i, leaf in enumerate(leaves):
            index.file(i, leaf)
            index.file("shared", leaf)

        index.clear()
        assert len(index) == 0
        assert list(index) == []
        assert all(leaf.objects == [] for leaf in leaves)
