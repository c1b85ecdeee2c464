import pytest
from hypothesis import given, strategies as st

from static_quadtree.algorithms.quad_tree import QuadTree
from static_quadtree.algorithms.window import Window
from static_quadtree.errors import ConfigurationError


class TestWindow:
    def test_set_window_maps_coordinates(self):
        window = Window()
        window.set_window(10, 10, 2)
        assert window.adjust(0, 0, 10, 10) == (10, 10, 15, 15)

    def test_windows_compose_relative_to_current_view(self):
        window = Window()
        window.set_window(10, 10, 2)
        window.set_window(10, 10, 2)

        assert window.origin == (15, 15)
        assert window.scale == 4
        assert window.adjust(0, 0, 4, 4) == (15, 15, 16, 16)

    def test_reset_discards_everything(self):
        window = Window()
        window.set_window(10, 20, 3)
        window.reset()

        assert window.origin == (0, 0)
        assert window.scale == 1
        assert window.adjust(1, 2, 3, 4) == (1, 2, 3, 4)

    def test_pan_at_unit_scale_is_inactive(self):
        window = Window()
        window.set_window(10, 10, 1)

        assert window.origin == (10, 10)
        assert not window.active
        assert window.adjust(0, 0, 5, 5) == (0, 0, 5, 5)

    def test_zero_scale_rejected(self):
        window = Window()
        window.set_window(5, 5, 2)
        with pytest.raises(ConfigurationError):
            window.set_window(1, 1, 0)
        assert window.origin == (5, 5)
        assert window.scale == 2

    @given(
        st.floats(-100, 100),
        st.floats(-100, 100),
        st.sampled_from([0.25, 0.5, 2, 4, 8])
    )
    def test_adjust_formula(self, sx, sy, s):
        window = Window()
        window.set_window(sx, sy, s)
        x0, y0, x1, y1 = window.adjust(8, 16, 32, 64)
        assert x0 == sx + 8 / s
        assert y0 == sy + 16 / s
        assert x1 == sx + 32 / s
        assert y1 == sy + 64 / s


class TestTreeWindow:
    def test_add_uses_transformed_coordinates(self):
        qt = QuadTree(xmin=0, ymin=0, xmax=100, ymax=100, depth=4)
        qt.set_window(10, 10, 2)
        qt.add("w", 0, 0, 10, 10)

        # (10, 10, 15, 15) straddles the 12.5 boundaries on both axes
        assert len(qt.leaves_for("w")) == 4

        qt.reset_window()
        qt.add("raw", 0, 0, 10, 10)
        assert [leaf.area for leaf in qt.leaves_for("raw")] == [(0, 0, 12.5, 12.5)]

    def test_query_uses_transformed_coordinates(self):
        qt = QuadTree(xmin=0, ymin=0, xmax=100, ymax=100, depth=2)
        qt.add("tr", 60, 60, 70, 70)

        qt.set_window(50, 50, 2)
        assert qt.get_enclosed_objects(10, 10, 20, 20) == {"tr"}
        qt.reset_window()
        assert qt.get_enclosed_objects(10, 10, 20, 20) == set()

    def test_window_does_not_move_filed_objects(self):
        qt = QuadTree(xmin=0, ymin=0, xmax=100, ymax=100, depth=3)
        qt.add("a", 10, 10, 20, 20)
        before = qt.leaves_for("a")

        qt.set_window(40, 40, 4)
        assert qt.leaves_for("a") == before
        qt.reset_window()
        assert qt.get_enclosed_objects(0, 0, 25, 25) == {"a"}

# --------------------------
# Running Tests
# --------------------------
#if __name__ == "__main__":
#    pytest.main([
#        "-v",
#        "--hypothesis-show-statistics",
#        "--cov=static_quadtree",
#        "--cov-report=html:coverage"
#    ])
# --------------------------
