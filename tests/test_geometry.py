import math

from cryptforge.dungeon.geometry import (
    Rect,
    create_polygon,
    distance,
    do_circles_overlap,
    do_rects_overlap,
    get_circle_points,
    get_filled_circle_points,
    get_line_points,
    get_rects_intersection,
    is_point_in_circle,
    is_point_in_polygon,
    is_point_in_rect,
    polygon_bounds,
)


def test_line_points_vertical_inclusive():
    assert get_line_points(5, 5, 5, 15) == [(5, y) for y in range(5, 16)]


def test_line_points_shallow_slope():
    assert get_line_points(0, 0, 3, 1) == [(0, 0), (1, 0), (2, 1), (3, 1)]


def test_line_points_reverse_and_single():
    assert get_line_points(3, 3, 0, 3) == [(3, 3), (2, 3), (1, 3), (0, 3)]
    assert get_line_points(2, 2, 2, 2) == [(2, 2)]


def test_line_points_are_8_connected():
    pts = get_line_points(-4, 7, 13, -2)
    for (x1, y1), (x2, y2) in zip(pts, pts[1:]):
        assert max(abs(x1 - x2), abs(y1 - y2)) == 1


def test_filled_circle_counts():
    assert sorted(get_filled_circle_points(0, 0, 1)) == [(-1, 0), (0, -1), (0, 0), (0, 1), (1, 0)]
    cells = get_filled_circle_points(10, 10, 3)
    assert all(is_point_in_circle(x, y, 10, 10, 3) for x, y in cells)
    assert len(set(cells)) == len(cells)


def test_circle_outline_near_radius():
    for x, y in get_circle_points(0, 0, 5):
        assert abs(math.hypot(x, y) - 5) < 1
    assert (5, 0) in get_circle_points(0, 0, 5)


def test_rect_helpers():
    a = Rect(0, 0, 2, 2)
    assert do_rects_overlap(a, Rect(1, 1, 2, 2))
    assert not do_rects_overlap(a, Rect(2, 0, 2, 2))
    assert get_rects_intersection(a, Rect(1, 1, 2, 2)) == Rect(1, 1, 1, 1)
    assert get_rects_intersection(a, Rect(5, 5, 1, 1)) is None
    assert is_point_in_rect(1, 1, 0, 0, 2, 2)
    assert not is_point_in_rect(2, 1, 0, 0, 2, 2)


def test_circles_and_distance():
    assert distance(0, 0, 3, 4) == 5
    assert do_circles_overlap(0, 0, 2, 4, 0, 2)
    assert not do_circles_overlap(0, 0, 1, 4, 0, 1)


def test_polygon_containment_and_bounds():
    square = [(0, 0), (4, 0), (4, 4), (0, 4)]
    assert is_point_in_polygon((2, 2), square)
    assert not is_point_in_polygon((5, 2), square)
    hexagon = create_polygon(10, 10, 3, 6)
    assert len(hexagon) == 6
    assert is_point_in_polygon((10, 10), hexagon)
    min_x, min_y, max_x, max_y = polygon_bounds(hexagon)
    assert math.isclose(min_x, 7) and math.isclose(max_x, 13)
    assert min_y > 7 and max_y < 13
