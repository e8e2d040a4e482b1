"""
Unit Tests for Neighbor Queries (src/clustering/neighbors.py)

Tests the exhaustive and indexed providers, the value -> position lookup and
strategy selection.
"""

import pytest

from src.clustering import neighbors as neighbors_module
from src.clustering.config import NeighborStrategy
from src.clustering.errors import MissingIndexError
from src.clustering.neighbors import (
    ExhaustiveNeighbors,
    IndexedNeighbors,
    build_position_lookup,
    make_neighbor_query,
)
from src.spatial import KDTreeIndex, euclidean_distance


class StaticIndex:
    """Spatial index stub that returns a fixed answer for every query."""

    def __init__(self, answer):
        self.answer = answer
        self.queries = []

    def query(self, center, radius):
        self.queries.append((center, radius))
        return list(self.answer)


# ==============================================================================
# Exhaustive Strategy Tests
# ==============================================================================

class TestExhaustiveNeighbors:
    """Test pairwise neighbor scanning."""
    
    def test_includes_self(self, line_points, distance_1d):
        """Test that a point is always its own neighbor."""
        query = ExhaustiveNeighbors(line_points, 0.5, distance_1d)
        
        for i in range(len(line_points)):
            assert query.neighbors(i) == [i]
    
    def test_strict_radius(self, distance_1d):
        """Test that a point exactly epsilon away is not a neighbor."""
        query = ExhaustiveNeighbors([0.0, 1.0, 1.5], 1.0, distance_1d)
        
        assert query.neighbors(0) == [0]
        assert query.neighbors(1) == [1, 2]
    
    def test_ascending_positions(self, line_points, distance_1d):
        """Test that neighbors come back in input order."""
        query = ExhaustiveNeighbors(line_points, 1.5, distance_1d)
        
        assert query.neighbors(1) == [0, 1, 2]
        assert query.neighbors(4) == [3, 4]
    
    def test_duplicates_tracked_by_position(self, distance_1d):
        """Test that equal values at different positions are all reported."""
        query = ExhaustiveNeighbors([3, 3, 3], 0.1, distance_1d)
        
        assert query.neighbors(0) == [0, 1, 2]
    
    def test_distance_error_propagates(self):
        """Test that distance function errors surface unchanged."""
        boom = KeyError("missing coordinate")
        
        def failing(a, b):
            raise boom
        
        query = ExhaustiveNeighbors([1, 2], 1.0, failing)
        
        with pytest.raises(KeyError) as exc_info:
            query.neighbors(0)
        assert exc_info.value is boom


# ==============================================================================
# Indexed Strategy Tests
# ==============================================================================

class TestIndexedNeighbors:
    """Test index-backed neighbor lookup."""
    
    def test_maps_values_to_positions(self, line_points):
        """Test that index results are translated to input positions."""
        index = KDTreeIndex.build(line_points)
        query = IndexedNeighbors(line_points, 1.5, index)
        
        assert query.neighbors(0) == [0, 1]
        assert query.neighbors(3) == [3, 4]
    
    def test_duplicates_counted_once_per_position(self):
        """Test that repeated values map to each of their positions exactly once."""
        values = [1.0, 1.0, 1.0, 5.0]
        index = KDTreeIndex.build(values)
        query = IndexedNeighbors(values, 0.5, index)
        
        assert query.neighbors(1) == [0, 1, 2]
        assert query.neighbors(3) == [3]
    
    def test_unknown_values_ignored(self):
        """Test that values outside the run are dropped."""
        index = StaticIndex(["a", "zzz", "b"])
        query = IndexedNeighbors(["a", "b", "c"], 1.0, index)
        
        assert query.neighbors(2) == [0, 1]
        assert index.queries == [("c", 1.0)]
    
    def test_lookup_built_once(self, monkeypatch, line_points):
        """Test that the position lookup is built at construction only."""
        calls = []
        original = neighbors_module.build_position_lookup
        
        def counting(values):
            calls.append(len(values))
            return original(values)
        
        monkeypatch.setattr(neighbors_module, "build_position_lookup", counting)
        
        query = IndexedNeighbors(line_points, 1.5, KDTreeIndex.build(line_points))
        for i in range(len(line_points)):
            query.neighbors(i)
        
        assert calls == [len(line_points)]
    
    def test_matches_exhaustive(self, two_blobs):
        """Test membership equivalence with a distance-consistent index."""
        eps = 0.4
        exhaustive = ExhaustiveNeighbors(two_blobs, eps, euclidean_distance)
        indexed = IndexedNeighbors(two_blobs, eps, KDTreeIndex.build(two_blobs))
        
        for i in range(len(two_blobs)):
            assert indexed.neighbors(i) == exhaustive.neighbors(i)


# ==============================================================================
# Lookup and Factory Tests
# ==============================================================================

class TestPositionLookup:
    """Test value -> positions mapping."""
    
    def test_groups_equal_values(self):
        lookup = build_position_lookup(["x", "y", "x"])
        
        assert lookup == {"x": [0, 2], "y": [1]}
    
    def test_unhashable_values_rejected(self):
        with pytest.raises(TypeError):
            build_position_lookup([[1, 2], [3, 4]])


class TestMakeNeighborQuery:
    """Test strategy selection."""
    
    def test_exhaustive(self, line_points, distance_1d):
        query = make_neighbor_query(
            NeighborStrategy.EXHAUSTIVE, line_points, 1.0, distance_function=distance_1d
        )
        assert isinstance(query, ExhaustiveNeighbors)
        assert query.strategy is NeighborStrategy.EXHAUSTIVE
    
    def test_indexed(self, line_points):
        query = make_neighbor_query(
            NeighborStrategy.INDEXED, line_points, 1.0, index=KDTreeIndex.build(line_points)
        )
        assert isinstance(query, IndexedNeighbors)
        assert query.strategy is NeighborStrategy.INDEXED
    
    def test_indexed_without_index(self, line_points, distance_1d):
        """Test that the indexed strategy never falls back to a distance function."""
        with pytest.raises(MissingIndexError):
            make_neighbor_query(
                NeighborStrategy.INDEXED, line_points, 1.0, distance_function=distance_1d
            )
    
    def test_exhaustive_without_distance_function(self, line_points):
        with pytest.raises(ValueError, match="distance function"):
            make_neighbor_query(NeighborStrategy.EXHAUSTIVE, line_points, 1.0)
