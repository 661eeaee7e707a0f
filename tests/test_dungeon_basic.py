import unittest


from cryptforge.dungeon import CellType, DungeonGenerator


class TestBasicDungeon(unittest.TestCase):
    def setUp(self):
        self.d = DungeonGenerator(seed=42).generate()

    def test_rooms_exist(self):
        self.assertGreater(self.d.metrics["rooms_placed"], 0)
        self.assertEqual(self.d.metrics["rooms_placed"], len(self.d.rooms))

    def test_border_is_wall(self):
        w, h = self.d.width, self.d.height
        for x in range(w):
            self.assertEqual(self.d.grid[x][0], CellType.WALL)
            self.assertEqual(self.d.grid[x][h - 1], CellType.WALL)
        for y in range(h):
            self.assertEqual(self.d.grid[0][y], CellType.WALL)
            self.assertEqual(self.d.grid[w - 1][y], CellType.WALL)

    def test_room_cells_are_never_wall_or_corridor(self):
        for room in self.d.rooms:
            for x, y in room.cells:
                self.assertNotIn(
                    self.d.grid[x][y],
                    (CellType.WALL, CellType.CORRIDOR),
                    f"Room {room.id} cell {(x, y)} was overwritten",
                )

    def test_doors_open_onto_something(self):
        # Each door keeps at least one orthogonal non-wall neighbour
        for door in self.d.doors:
            x, y = door.position
            self.assertIn(self.d.grid[x][y], (CellType.DOOR, CellType.SECRET_DOOR))
            self.assertTrue(
                any(
                    self.d.cell(nx, ny) not in (None, CellType.WALL)
                    for nx, ny in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1))
                ),
                f"Door at {(x, y)} is walled in",
            )

    def test_feature_ids_match_rooms(self):
        for feature in self.d.features:
            room = self.d.room_by_id(feature.room_id)
            self.assertIsNotNone(room)
            self.assertIn(feature, room.features)


if __name__ == "__main__":
    unittest.main()
