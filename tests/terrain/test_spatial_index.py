"""Tests for the rtree-backed nearest neighbor search."""

import numpy as np
import pytest

from open_terrain.terrain.spatial_index import SpatialIndex


@pytest.fixture
def index() -> SpatialIndex:
    return SpatialIndex(np.array([0.0, 10.0, 0.0, 5.0]), np.array([0.0, 0.0, 10.0, 5.0]))


class TestNearest:
    def test_sorted_by_distance(self, index: SpatialIndex) -> None:
        distances, indices = index.nearest(1.0, 1.0, k=4)

        assert indices.tolist() == [0, 3, 1, 2]
        assert np.all(np.diff(distances) >= 0)
        assert distances[0] == pytest.approx(np.sqrt(2.0))

    def test_clamps_k_to_point_count(self, index: SpatialIndex) -> None:
        distances, indices = index.nearest(0.0, 0.0, k=50)

        assert len(indices) == 4
        assert len(distances) == 4

    def test_ties_keep_first_point(self) -> None:
        index = SpatialIndex(np.array([1.0, -1.0, 0.0, 0.0]), np.array([0.0, 0.0, 1.0, -1.0]))

        _, indices = index.nearest(0.0, 0.0, k=2)

        assert indices.tolist() == [0, 1]

    def test_duplicate_positions_ordered_by_index(self) -> None:
        index = SpatialIndex(np.array([3.0, 3.0, 3.0]), np.array([4.0, 4.0, 4.0]))

        distances, indices = index.nearest(0.0, 0.0, k=2)

        assert indices.tolist() == [0, 1]
        np.testing.assert_array_equal(distances, [5.0, 5.0])

    def test_exact_hit_has_zero_distance(self, index: SpatialIndex) -> None:
        distances, indices = index.nearest(5.0, 5.0, k=1)

        assert indices.tolist() == [3]
        assert distances[0] == 0.0


class TestQuery:
    def test_rows_follow_query_order(self, index: SpatialIndex) -> None:
        neighbors = index.query(np.array([10.0, 0.0, 0.0]), np.array([0.0, 10.0, 0.0]), k=1)

        assert neighbors.k == 1
        assert neighbors.indices[:, 0].tolist() == [1, 2, 0]

    def test_empty_query(self, index: SpatialIndex) -> None:
        neighbors = index.query(np.array([]), np.array([]), k=3)

        assert neighbors.distances.shape == (0, 3)

    def test_rejects_empty_index(self) -> None:
        with pytest.raises(ValueError):
            SpatialIndex(np.array([]), np.array([]))
