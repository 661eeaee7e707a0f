import dataclasses

import pytest

from cryptforge.dungeon import CellType, DungeonGenerator, analyze, is_sound, preset
from cryptforge.dungeon.cells import Door


@pytest.mark.parametrize("name", ["default", "small", "cave", "maze", "temple"])
@pytest.mark.parametrize("seed", [292372, 730727, "abc"])
def test_generated_dungeons_are_sound(name, seed):
    d = DungeonGenerator(preset(name, seed=seed)).generate()
    report = analyze(d)
    assert is_sound(report), report


def test_loop_dungeons_are_sound():
    d = DungeonGenerator(seed=3, create_loops=True, loop_chance=0.5).generate()
    report = analyze(d)
    assert report["corridor_count_ok"]
    assert is_sound(report), report


def test_missing_corridors_are_reported():
    d = DungeonGenerator(seed=3, num_rooms=6).generate()
    assert len(d.rooms) > 1
    broken = dataclasses.replace(d, corridors=())
    report = analyze(broken)
    assert not report["corridor_count_ok"]
    assert report["disconnected_rooms"]
    assert not is_sound(report)


def test_door_on_a_wall_is_reported():
    d = DungeonGenerator(seed=3).generate()
    assert d.cell(0, 0) == CellType.WALL
    fake = Door(position=(0, 0), kind=CellType.DOOR, connects=(0, 1))
    report = analyze(dataclasses.replace(d, doors=d.doors + (fake,)))
    assert report["invalid_doors"] == [(0, 0)]
    assert not is_sound(report)


def test_detached_corridor_is_reported():
    d = DungeonGenerator(seed=3, num_rooms=6).generate()
    assert analyze(d)["endpoint_detached"] == []
    first = d.corridors[0]
    stray = dataclasses.replace(first, path=((0, 0), (1, 0)))
    report = analyze(dataclasses.replace(d, corridors=(stray,) + d.corridors[1:]))
    assert report["endpoint_detached"] == [(first.from_id, first.to_id)]
    assert not is_sound(report)
