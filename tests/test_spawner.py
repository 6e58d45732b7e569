from __future__ import annotations

import random
import unittest

from gridsnake.spawner import maybe_spawn


class ScriptedRandom:
    """Replays fixed draws: floats for random(), ints for randrange()."""

    def __init__(self, floats, ints):
        self.floats = list(floats)
        self.ints = list(ints)
        self.randrange_calls = 0

    def random(self):
        return self.floats.pop(0)

    def randrange(self, stop):
        self.randrange_calls += 1
        value = self.ints.pop(0)
        assert 0 <= value < stop
        return value


class MaybeSpawnTest(unittest.TestCase):
    def test_draw_above_chance_spawns_nothing(self):
        treats: set = set()
        rng = ScriptedRandom([0.5], [])
        self.assertIsNone(maybe_spawn(treats, [(0, 0), (0, 1)], 10, 0.1, rng))
        self.assertEqual(treats, set())
        self.assertEqual(rng.randrange_calls, 0)

    def test_draw_equal_to_chance_spawns_nothing(self):
        treats: set = set()
        rng = ScriptedRandom([0.1], [])
        self.assertIsNone(maybe_spawn(treats, [(0, 0), (0, 1)], 10, 0.1, rng))

    def test_occupied_cells_are_rejected(self):
        body = [(5, 5), (6, 5), (7, 5)]
        treats: set = set()
        rng = ScriptedRandom([0.05], [5, 5, 7, 5, 2, 3])

        spawned = maybe_spawn(treats, body, 10, 0.1, rng)

        self.assertEqual(spawned, (2, 3))
        self.assertEqual(treats, {(2, 3)})
        self.assertEqual(rng.randrange_calls, 6)

    def test_existing_treat_is_idempotent(self):
        treats = {(2, 3)}
        rng = ScriptedRandom([0.0], [2, 3])
        self.assertEqual(maybe_spawn(treats, [(0, 0), (0, 1)], 10, 0.1, rng), (2, 3))
        self.assertEqual(treats, {(2, 3)})

    def test_attempt_cap_skips_the_spawn(self):
        body = [(0, 0), (0, 1), (1, 1)]
        treats: set = set()
        rng = ScriptedRandom([0.0], [0, 0] * 3)

        self.assertIsNone(maybe_spawn(treats, body, 2, 1.0, rng, max_attempts=3))
        self.assertEqual(treats, set())
        self.assertEqual(rng.randrange_calls, 6)

    def test_saturated_board_returns_immediately(self):
        body = [(0, 0), (0, 1), (1, 1), (1, 0)]
        treats: set = set()
        rng = ScriptedRandom([0.0], [])
        self.assertIsNone(maybe_spawn(treats, body, 2, 1.0, rng))
        self.assertEqual(rng.randrange_calls, 0)

    def test_spawns_never_land_on_the_body(self):
        rng = random.Random(1234)
        body = [(r, c) for r in range(4) for c in range(4) if (r, c) != (3, 3)]
        for _ in range(200):
            treats: set = set()
            spawned = maybe_spawn(treats, body, 4, 1.0, rng)
            self.assertEqual(spawned, (3, 3))

    def test_seeded_sequences_repeat(self):
        def sequence(seed):
            rng = random.Random(seed)
            treats: set = set()
            out = [maybe_spawn(treats, [(5, 5), (6, 5)], 10, 0.5, rng) for _ in range(50)]
            return out, treats

        self.assertEqual(sequence(7), sequence(7))


if __name__ == "__main__":
    unittest.main()
