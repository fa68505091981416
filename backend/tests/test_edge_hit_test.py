"""
Tests for stateless edge hit testing and the caching EdgeHitTester.
"""

from __future__ import annotations

import math
import random
import sys
from pathlib import Path as FsPath

import pytest

sys.path.append(str(FsPath(__file__).resolve().parents[1]))

from pathedit.services.anchor import Anchor
from pathedit.services.bounding_box import BoundingBox
from pathedit.services.edge import Edge
from pathedit.services.edge_helpers import edges_from_path
from pathedit.services.edge_hit_test import (
    EdgeHitTester,
    edges_contained_in_box,
    edges_intersecting_box,
    hit_test_edge,
    hit_test_edges,
    hit_test_edges_all,
    hit_test_item_edges,
    hit_test_item_edges_all,
)
from pathedit.services.path import Path
from pathedit.services.vec import Vec2


def line_edge(x1: float, y1: float, x2: float, y2: float, index: int = 0) -> Edge:
    return Edge(Anchor(Vec2(x1, y1)), Anchor(Vec2(x2, y2)), index=index)


def arch_edge() -> Edge:
    """Curve from (0,0) to (100,0) bulging up to (50,75); anchors alone span y=0."""
    return Edge(
        Anchor(Vec2(0, 0), handle_out=Vec2(0, 100)),
        Anchor(Vec2(100, 0), handle_in=Vec2(0, 100)),
        index=5,
    )


def rectangle_edges() -> list[Edge]:
    return edges_from_path(Path.from_points([(0, 0), (10, 0), (10, 10), (0, 10)], closed=True))


def random_edges(rng: random.Random, count: int) -> list[Edge]:
    edges = []
    for i in range(count):
        p1 = Vec2(rng.uniform(0, 200), rng.uniform(0, 200))
        p2 = Vec2(rng.uniform(0, 200), rng.uniform(0, 200))
        if i % 2:
            a1 = Anchor(p1, handle_out=Vec2(rng.uniform(-60, 60), rng.uniform(-60, 60)))
            a2 = Anchor(p2, handle_in=Vec2(rng.uniform(-60, 60), rng.uniform(-60, 60)))
        else:
            a1, a2 = Anchor(p1), Anchor(p2)
        edges.append(Edge(a1, a2, index=i))
    return edges


def test_hit_test_edge_respects_tolerance() -> None:
    edge = line_edge(0, 0, 100, 0)
    assert hit_test_edge(edge, Vec2(50, 10), tolerance=5) is None
    hit = hit_test_edge(edge, Vec2(50, 10), tolerance=15)
    assert hit is not None
    assert hit.edge is edge
    assert hit.position == Vec2(50, 0)
    assert hit.time == pytest.approx(0.5)
    assert hit.distance == pytest.approx(10.0)


def test_hit_test_edge_tolerance_is_inclusive() -> None:
    assert hit_test_edge(line_edge(0, 0, 100, 0), Vec2(50, 10), tolerance=10) is not None


def test_hit_test_edges_picks_nearest_parallel_edge() -> None:
    bottom = line_edge(0, 0, 100, 0, index=0)
    top = line_edge(0, 10, 100, 10, index=1)
    hit = hit_test_edges([bottom, top], Vec2(50, 8), max_distance=10)
    assert hit is not None
    assert hit.edge is top
    assert hit.distance == pytest.approx(2.0)


def test_hit_test_edges_first_edge_wins_ties() -> None:
    first = line_edge(0, 0, 100, 0, index=0)
    second = line_edge(0, 0, 100, 0, index=1)
    hit = hit_test_edges([first, second], Vec2(50, 3))
    assert hit is not None and hit.edge is first


def test_hit_test_edges_returns_none_when_nothing_in_range() -> None:
    assert hit_test_edges([line_edge(0, 0, 100, 0)], Vec2(50, 50), max_distance=10) is None
    assert hit_test_edges([], Vec2(0, 0)) is None


def test_hit_test_edges_is_global_minimum() -> None:
    rng = random.Random(7)
    edges = random_edges(rng, 24)
    for _ in range(40):
        point = Vec2(rng.uniform(-20, 220), rng.uniform(-20, 220))
        hit = hit_test_edges(edges, point, max_distance=30)
        distances = [e.closest_point(point).distance for e in edges]
        in_range = [d for d in distances if d <= 30]
        if not in_range:
            assert hit is None
        else:
            assert hit is not None
            assert hit.distance == min(in_range)
            assert hit.edge is edges[distances.index(min(in_range))]


def test_hit_test_edges_all_rectangle_centre() -> None:
    edges = rectangle_edges()
    hits = hit_test_edges_all(edges, Vec2(5, 5), tolerance=10)
    assert len(hits) == 4
    assert all(h.distance == pytest.approx(5.0) for h in hits)
    # Equal distances keep input order.
    assert [h.edge.index for h in hits] == [0, 1, 2, 3]


def test_hit_test_edges_all_sorted_by_distance() -> None:
    hits = hit_test_edges_all(rectangle_edges(), Vec2(3, 4), tolerance=10)
    assert [h.edge.index for h in hits] == [3, 0, 2, 1]
    assert [h.distance for h in hits] == pytest.approx([3.0, 4.0, 6.0, 7.0])
    assert hit_test_edges_all(rectangle_edges(), Vec2(3, 4), tolerance=3.5)[0].edge.index == 3


def test_degenerate_edge_hit() -> None:
    hit = hit_test_edge(line_edge(3, 4, 3, 4), Vec2(0, 0), tolerance=10)
    assert hit is not None
    assert hit.distance == pytest.approx(5.0)
    assert hit.time == 0


def test_invalid_edges_are_skipped() -> None:
    bad = Edge(Anchor(Vec2(math.nan, 0)), Anchor(Vec2(100, 0)))
    good = line_edge(0, 5, 100, 5, index=1)
    assert hit_test_edge(bad, Vec2(50, 0)) is None
    hit = hit_test_edges([bad, good], Vec2(50, 0), max_distance=10)
    assert hit is not None and hit.edge is good
    assert [h.edge for h in hit_test_edges_all([bad, good], Vec2(50, 0), 10)] == [good]
    box = BoundingBox(Vec2(-10, -10), Vec2(200, 200))
    assert edges_intersecting_box([bad, good], box) == [good]
    assert edges_contained_in_box([bad, good], box) == [good]


def test_item_hit_tests() -> None:
    square = Path.from_points([(0, 0), (10, 0), (10, 10), (0, 10)], closed=True)
    hit = hit_test_item_edges(square, Vec2(5, -1))
    assert hit is not None and hit.edge.index == 0
    assert len(hit_test_item_edges_all(square, Vec2(5, 5), tolerance=5)) == 4


def test_edges_intersecting_box() -> None:
    inside = line_edge(10, 10, 20, 20, index=0)
    crossing = line_edge(-50, 15, 50, 15, index=1)
    outside = line_edge(100, 100, 200, 100, index=2)
    box = BoundingBox(Vec2(0, 0), Vec2(30, 30))
    assert edges_intersecting_box([inside, crossing, outside], box) == [inside, crossing]


def test_edges_intersecting_box_uses_control_points_for_curves() -> None:
    box = BoundingBox(Vec2(40, 90), Vec2(60, 110))
    assert edges_intersecting_box([arch_edge()], box) != []
    assert edges_intersecting_box([line_edge(0, 0, 100, 0)], box) == []


def test_edges_contained_in_box() -> None:
    inner = line_edge(10, 10, 20, 20, index=0)
    partial = line_edge(10, 10, 50, 10, index=1)
    curve = Edge(
        Anchor(Vec2(10, 10), handle_out=Vec2(0, 50)),
        Anchor(Vec2(20, 10), handle_in=Vec2(0, 5)),
        index=2,
    )
    box = BoundingBox(Vec2(0, 0), Vec2(30, 30))
    # The curve's anchors are inside but its first control point is not.
    assert edges_contained_in_box([inner, partial, curve], box) == [inner]
    big = BoundingBox(Vec2(0, 0), Vec2(60, 60))
    assert edges_contained_in_box([inner, partial, curve], big) == [inner, partial, curve]


def test_edges_contained_in_box_is_inclusive() -> None:
    edge = line_edge(0, 0, 10, 10)
    assert edges_contained_in_box([edge], BoundingBox(Vec2(0, 0), Vec2(10, 10))) == [edge]


def test_edges_contained_in_box_is_monotone_when_shrinking() -> None:
    rng = random.Random(11)
    edges = random_edges(rng, 30)
    box = BoundingBox(Vec2(-50, -50), Vec2(250, 250))
    previous = set(map(id, edges_contained_in_box(edges, box)))
    for _ in range(25):
        box = BoundingBox(
            Vec2(box.min.x + rng.uniform(0, 6), box.min.y + rng.uniform(0, 6)),
            Vec2(box.max.x - rng.uniform(0, 6), box.max.y - rng.uniform(0, 6)),
        )
        current = set(map(id, edges_contained_in_box(edges, box)))
        assert current <= previous
        previous = current


def test_tester_bounds_are_cached_and_invalidated() -> None:
    tester = EdgeHitTester()
    assert tester.get_bounds() is None
    tester.set_edges(rectangle_edges())
    bounds = tester.get_bounds()
    assert bounds == BoundingBox(Vec2(0, 0), Vec2(10, 10))
    assert tester.get_bounds() is bounds
    tester.set_edges([line_edge(-5, -5, 5, 5)])
    assert tester.get_bounds() == BoundingBox(Vec2(-5, -5), Vec2(5, 5))


def test_tester_set_item_builds_edges() -> None:
    square = Path.from_points([(0, 0), (10, 0), (10, 10), (0, 10)], closed=True)
    tester = EdgeHitTester(tolerance=2).set_item(square)
    assert len(tester.edges) == 4
    hit = tester.test(Vec2(11, 5))
    assert hit is not None and hit.edge.index == 1


def test_tester_rejects_far_points() -> None:
    tester = EdgeHitTester(tolerance=5).set_edges(rectangle_edges())
    assert tester.test(Vec2(100, 100)) is None
    assert tester.test_all(Vec2(100, 100)) == []
    assert tester.test(Vec2(14, 5)) is not None


def test_tester_test_all_rectangle() -> None:
    tester = EdgeHitTester(tolerance=10).set_edges(rectangle_edges())
    hits = tester.test_all(Vec2(5, 5))
    assert len(hits) == 4
    distances = [h.distance for h in hits]
    assert distances == sorted(distances)


def test_tester_finds_curve_bulge_outside_anchor_bounds() -> None:
    tester = EdgeHitTester(tolerance=5).set_edges([arch_edge()])
    hit = tester.test(Vec2(50, 78))
    assert hit is not None
    assert hit.distance == pytest.approx(3.0, abs=1e-3)


def test_tester_agrees_with_unpruned_scan() -> None:
    rng = random.Random(3)
    edges = random_edges(rng, 16) + [arch_edge()]
    tester = EdgeHitTester(tolerance=8).set_edges(edges)
    for x in range(-40, 260, 13):
        for y in range(-40, 260, 17):
            point = Vec2(float(x), float(y))
            direct = hit_test_edges(edges, point, max_distance=8)
            pruned = tester.test(point)
            if direct is None:
                assert pruned is None
            else:
                assert pruned is not None
                assert pruned.edge is direct.edge
                assert pruned.distance == direct.distance


def test_tester_test_box() -> None:
    tester = EdgeHitTester().set_edges(rectangle_edges())
    box = BoundingBox(Vec2(-1, -1), Vec2(11, 5))
    assert [e.index for e in tester.test_box(box)] == [0, 1, 3]
    assert [e.index for e in tester.test_box(box, fully_contained=True)] == [0]
