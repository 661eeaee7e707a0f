import pytest

from cryptforge.dungeon import DungeonGenerator, preset


@pytest.mark.parametrize("name", ["default", "small", "cave", "maze", "temple", "loopy"])
def test_same_params_same_dungeon(name):
    a = DungeonGenerator(preset(name, seed=12345)).generate()
    b = DungeonGenerator(preset(name, seed=12345)).generate()
    assert a == b
    assert a.to_ascii() == b.to_ascii()


def test_generator_is_reusable():
    gen = DungeonGenerator(seed="reuse", num_rooms=8)
    first = gen.generate()
    second = gen.generate()
    assert first == second
    assert [r.description for r in first.rooms] == [r.description for r in second.rooms]


def test_text_seed_matches_its_numeric_hash():
    by_text = DungeonGenerator(seed="abc", width=30, height=30, num_rooms=5).generate()
    by_number = DungeonGenerator(seed=96354, width=30, height=30, num_rooms=5).generate()
    assert by_text.seed == "abc"
    assert by_number.seed == 96354
    assert by_text.grid == by_number.grid
    assert by_text.rooms == by_number.rooms


def test_numeric_text_seed_is_a_number():
    assert DungeonGenerator(seed="42").generate() == DungeonGenerator(seed=42).generate()


def test_different_seeds_differ():
    a = DungeonGenerator(seed=1).generate()
    b = DungeonGenerator(seed=2).generate()
    assert a.grid != b.grid


@pytest.mark.parametrize("style", ["straight", "bendy", "organic"])
def test_every_hallway_style_is_deterministic(style):
    a = DungeonGenerator(seed=77, hallway_style=style, create_loops=True, loop_chance=0.3).generate()
    b = DungeonGenerator(seed=77, hallway_style=style, create_loops=True, loop_chance=0.3).generate()
    assert a == b
    assert [c.path for c in a.corridors] == [c.path for c in b.corridors]
