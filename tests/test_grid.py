import unittest

from helpers import bfs_distances, bfs_turns, open_grid

from wordmaze.core.constants import Direction, EntityType
from wordmaze.core.exceptions import GridError
from wordmaze.core.models import Entity, Position
from wordmaze.engine.grid import Grid, GridConfig


class GridConnectivityTests(unittest.TestCase):
    def test_rejects_non_positive_dimensions(self) -> None:
        with self.assertRaises(GridError):
            Grid(0, 3)

    def test_set_entity_outside_bounds_raises(self) -> None:
        grid = Grid(2, 2)
        with self.assertRaises(GridError):
            grid.set_entity(Position(2, 0), Entity.wall())

    def test_absent_entry_is_nothing(self) -> None:
        grid = Grid(2, 2)
        self.assertEqual(grid.entity_at(Position(1, 1)).type, EntityType.NOTHING)

    def test_randomise_walls_places_exact_fraction(self) -> None:
        grid = Grid.from_config(GridConfig(rows=4, cols=4, rng_seed=3))
        grid.randomise_walls(0.25, 0.25)
        self.assertEqual(grid.wall_count(), 4)

    def test_valid_neighbours_filters_bounds_not_walls(self) -> None:
        grid = Grid(2, 2)
        grid.set_entity(Position(0, 1), Entity.wall())
        self.assertEqual(grid.valid_neighbours(Position(0, 0)), [Position(1, 0), Position(0, 1)])

    def test_explore_section_from_wall_is_empty(self) -> None:
        grid = Grid(1, 1)
        grid.set_entity(Position(0, 0), Entity.wall())
        self.assertEqual(grid.explore_section(Position(0, 0)), set())

    def test_find_connected_sections_splits_on_walls(self) -> None:
        grid = Grid(3, 3)
        grid.set_positions([Position(0, 1), Position(1, 1), Position(2, 1)], Entity.wall())
        sections = grid.find_connected_sections()
        self.assertEqual(len(sections), 2)
        self.assertEqual(sections[0], {Position(0, 0), Position(1, 0), Position(2, 0)})
        self.assertEqual(sections[1], {Position(0, 2), Position(1, 2), Position(2, 2)})

    def test_initialise_walls_leaves_single_component(self) -> None:
        for seed in range(12):
            grid = Grid.from_config(GridConfig(rows=8, cols=8, rng_seed=seed))
            free_space = grid.initialise_walls()
            sections = grid.find_connected_sections()
            if free_space:
                self.assertEqual(len(sections), 1)
                self.assertEqual(sections[0], free_space)
            else:
                self.assertEqual(sections, [])
            self.assertEqual(grid.free_space(), free_space)

    def test_initialise_walls_on_walled_cell_returns_empty(self) -> None:
        grid = Grid(1, 1)
        grid.set_entity(Position(0, 0), Entity.wall())
        self.assertEqual(grid.initialise_walls(), set())

    def test_json_round_trip(self) -> None:
        grid = Grid(2, 3)
        grid.set_entity(Position(1, 2), Entity.wall())
        payload = grid.to_jsonable()
        self.assertEqual(payload["entities"], {"1_2": {"type": "wall"}})
        self.assertEqual(Grid.from_jsonable(payload), grid)


class NavigationMapTests(unittest.TestCase):
    def test_corridor_scenario(self) -> None:
        grid = open_grid(1, 3)
        free_space = grid.initialise_walls()
        self.assertEqual(free_space, {Position(0, 0), Position(0, 1), Position(0, 2)})

        distances = grid.generate_distance_map()
        turns = grid.generate_turns_map()
        self.assertEqual(distances.get(Position(0, 0), Position(0, 2)), 2)
        self.assertEqual(turns.get(Position(0, 0), Position(0, 2)), (0, Direction.RIGHT))
        self.assertEqual(turns.get(Position(0, 2), Position(0, 0)), (0, Direction.LEFT))

    def test_distance_map_matches_bfs_and_is_symmetric(self) -> None:
        for seed in (1, 5, 9):
            grid = Grid.from_config(GridConfig(rows=7, cols=7, rng_seed=seed))
            free_space = grid.initialise_walls()
            distances = grid.generate_distance_map()
            self.assertEqual(len(distances), len(free_space) ** 2)
            for origin in free_space:
                expected = bfs_distances(grid, origin, free_space)
                for destination in free_space:
                    self.assertEqual(distances.get(origin, destination), expected[destination])
                    self.assertEqual(
                        distances.get(origin, destination),
                        distances.get(destination, origin),
                    )

    def test_turns_map_self_entries(self) -> None:
        grid = Grid.from_config(GridConfig(rows=6, cols=6, rng_seed=4))
        free_space = grid.initialise_walls()
        turns = grid.generate_turns_map()
        for position in free_space:
            self.assertEqual(turns.get(position, position), (0, None))

    def test_turns_map_obstacle_free_bound(self) -> None:
        grid = open_grid(4, 5)
        free_space = grid.initialise_walls()
        turns = grid.generate_turns_map()
        for origin in free_space:
            for destination in free_space:
                count, direction = turns.get(origin, destination)
                aligned = origin.row == destination.row or origin.col == destination.col
                self.assertEqual(count, 0 if aligned else 1)
                if origin != destination:
                    self.assertIsNotNone(direction)
                    step = origin.step(direction)
                    self.assertEqual(
                        step.manhattan_distance(destination),
                        origin.manhattan_distance(destination) - 1,
                    )

    def test_turns_map_keeps_equal_options_open(self) -> None:
        # # . .
        # . . .
        # . . .
        # Down then left costs one turn; left then down costs two.
        grid = open_grid(3, 3)
        grid.set_entity(Position(0, 0), Entity.wall())
        grid.initialise_walls()
        turns = grid.generate_turns_map()
        self.assertEqual(turns.get(Position(0, 1), Position(2, 0)), (1, Direction.DOWN))

    def test_turns_map_matches_heading_bfs(self) -> None:
        for seed in (2, 6, 11, 17):
            grid = Grid.from_config(GridConfig(rows=7, cols=7, rng_seed=seed))
            free_space = grid.initialise_walls()
            turns = grid.generate_turns_map()
            self.assertEqual(len(turns), len(free_space) ** 2)
            for origin in free_space:
                expected = bfs_turns(grid, origin, free_space)
                for destination in free_space:
                    count, _ = turns.get(origin, destination)
                    self.assertEqual(count, expected[destination])

    def test_turns_prefer_straight_detour(self) -> None:
        # . . .
        # . # .
        # Going from (1,0) to (1,2) needs two turns around the wall; the map
        # must not claim fewer.
        grid = open_grid(2, 3)
        grid.set_entity(Position(1, 1), Entity.wall())
        grid.initialise_walls()
        turns = grid.generate_turns_map()
        self.assertEqual(turns.get(Position(1, 0), Position(1, 2)), (2, Direction.UP))
        self.assertEqual(turns.get(Position(1, 0), Position(0, 2)), (1, Direction.UP))

    def test_maps_exclude_walls(self) -> None:
        grid = open_grid(2, 2)
        grid.set_entity(Position(1, 1), Entity.wall())
        grid.initialise_walls()
        distances = grid.generate_distance_map()
        self.assertNotIn((Position(0, 0), Position(1, 1)), distances)
        self.assertIsNone(distances.row(Position(1, 1)))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
