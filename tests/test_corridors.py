import pytest

from cryptforge.dungeon import CorridorGenerator
from cryptforge.dungeon.cells import as_cell

from tests.dungeon_test_utils import square


def _row_of_rooms(count, spacing=10):
    return [square(i, 2 + i * spacing, 5, 3) for i in range(count)]


def _connected(room_count, corridors):
    parent = list(range(room_count))

    def find(a):
        while parent[a] != a:
            a = parent[a]
        return a

    for c in corridors:
        parent[find(c.from_id)] = find(c.to_id)
    return len({find(i) for i in range(room_count)}) == 1


def _steps_are_orthogonal(path):
    return all(abs(x1 - x2) + abs(y1 - y2) == 1 for (x1, y1), (x2, y2) in zip(path, path[1:]))


def test_no_corridors_for_zero_or_one_room():
    gen = CorridorGenerator(1)
    assert gen.generate_corridors([], 30, 30) == []
    assert gen.generate_corridors([square(0, 5, 5)], 30, 30) == []


def test_straight_corridor_between_stacked_rooms():
    rooms = [square(0, 5, 5), square(1, 5, 15)]
    gen = CorridorGenerator(1, hallway_style="straight")
    corridors = gen.generate_corridors(rooms, 30, 30)
    assert len(corridors) == 1
    c = corridors[0]
    assert (c.from_id, c.to_id) == (0, 1)
    assert list(c.path) == [(5, y) for y in range(5, 16)]


def test_spanning_tree_links_nearest_neighbours():
    rooms = _row_of_rooms(4)
    corridors = CorridorGenerator(3).generate_corridors(rooms, 60, 20)
    assert sorted((c.from_id, c.to_id) for c in corridors) == [(0, 1), (1, 2), (2, 3)]


@pytest.mark.parametrize("seed", [1, 17, "abc"])
def test_spanning_tree_has_n_minus_one_edges_and_connects_everything(seed):
    rooms = [
        square(0, 2, 2, 3),
        square(1, 30, 4, 3),
        square(2, 12, 20, 3),
        square(3, 40, 35, 3),
        square(4, 5, 40, 3),
        square(5, 22, 12, 3),
    ]
    corridors = CorridorGenerator(seed).generate_corridors(rooms, 50, 50)
    assert len(corridors) == len(rooms) - 1
    assert _connected(len(rooms), corridors)


def test_edges_sorted_by_distance():
    rooms = [square(0, 0, 0), square(1, 10, 0), square(2, 3, 0)]
    edges = CorridorGenerator.create_all_edges(rooms)
    assert [e.key for e in edges] == [(0, 2), (1, 2), (0, 1)]
    assert [e.weight for e in edges] == [3, 7, 10]


def test_loops_add_extra_edges_only_when_enabled():
    rooms = _row_of_rooms(4)
    everything = CorridorGenerator(1, create_loops=True, loop_chance=1.0).generate_corridors(rooms, 60, 20)
    assert len(everything) == 6
    assert len({(c.from_id, c.to_id) for c in everything}) == 6
    disabled = CorridorGenerator(1, create_loops=False, loop_chance=1.0).generate_corridors(rooms, 60, 20)
    assert len(disabled) == 3
    never = CorridorGenerator(1, create_loops=True, loop_chance=0.0).generate_corridors(rooms, 60, 20)
    assert len(never) == 3


def test_bendy_path_is_a_single_elbow():
    gen = CorridorGenerator(11)
    path = gen.bendy_path((2, 2), (8, 6))
    assert path[0] == (2, 2) and path[-1] == (8, 6)
    assert len(path) == 6 + 4 + 1
    assert _steps_are_orthogonal(path)
    assert (8, 2) in path or (2, 6) in path


def test_unknown_style_routes_like_bendy():
    odd = CorridorGenerator(4, hallway_style="zigzag")
    bendy = CorridorGenerator(4, hallway_style="bendy")
    assert odd.generate_path((1, 1), (9, 7), 20, 20) == bendy.generate_path((1, 1), (9, 7), 20, 20)


@pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
def test_organic_path_is_clamped_and_continuous(seed):
    gen = CorridorGenerator(seed, hallway_style="organic")
    path = gen.generate_path((1, 1), (18, 2), 20, 12)
    assert path[0] == (1, 1) and path[-1] == (18, 2)
    assert all(0 <= x < 20 and 0 <= y < 12 for x, y in path)
    for (x1, y1), (x2, y2) in zip(path, path[1:]):
        assert max(abs(x1 - x2), abs(y1 - y2)) == 1


def test_connector_decides_corridor_endpoints():
    def east_edge(room, target):
        return (room.x + room.width - 1 + 0.4, room.center[1])

    rooms = [square(0, 2, 2, 3), square(1, 12, 2, 3)]
    gen = CorridorGenerator(1, hallway_style="straight", connector=east_edge)
    corridor = gen.generate_corridors(rooms, 30, 10)[0]
    assert corridor.path[0] == as_cell(east_edge(rooms[0], rooms[1].center)) == (4, 3)
    assert corridor.path[-1] == (14, 3)


def test_corridor_width_is_clamped():
    assert CorridorGenerator(1, corridor_width=7).corridor_width == 3
    assert CorridorGenerator(1, corridor_width=0).corridor_width == 1


def test_reset_replays_paths():
    gen = CorridorGenerator(8, hallway_style="organic")
    first = gen.generate_path((0, 0), (15, 15), 20, 20)
    gen.reset()
    assert gen.generate_path((0, 0), (15, 15), 20, 20) == first
