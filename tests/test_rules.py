import numpy as np
import pytest

from merge_puzzle_rl.game import GeneratorSource, SpawnRules, spawn_tile


def test_default_rules():
    rules = SpawnRules()
    assert rules.tile_values == (2, 4)
    assert rules.tile_weights == (0.9, 0.1)


@pytest.mark.parametrize("values,weights", [
    ((2, 4), (1.0,)),
    ((), ()),
    ((2, 3), (0.5, 0.5)),
    ((1, 2), (0.5, 0.5)),
    ((2, 4), (0.5, 0.4)),
    ((2, 4), (1.5, -0.5)),
    ((2.0, 4.0), (0.9, 0.1)),
    ((True, 4), (0.5, 0.5)),
])
def test_invalid_rules_rejected(values, weights):
    with pytest.raises(ValueError):
        SpawnRules(tile_values=values, tile_weights=weights)


def test_spawn_on_full_grid_is_noop(scripted):
    grid = np.full((4, 4), 2, dtype=np.int64)
    grid[::2, ::2] = 4
    rng = scripted()
    result = spawn_tile(grid, rng)
    assert np.array_equal(result, grid)
    assert rng.index_calls == []


def test_spawn_fills_chosen_empty_cell(scripted):
    grid = np.array([
        [2, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ])
    rng = scripted(indices=[2], values=[4])
    result = spawn_tile(grid, rng)
    assert rng.index_calls == [15]
    assert result[0, 3] == 4
    assert np.count_nonzero(result) == 2
    # Input untouched
    assert np.count_nonzero(grid) == 1


def test_spawn_last_empty_cell(scripted):
    grid = np.full((4, 4), 8, dtype=np.int64)
    grid[3, 1] = 0
    result = spawn_tile(grid, scripted())
    assert result[3, 1] == 2
    assert np.count_nonzero(result) == 16


def test_spawn_uses_custom_rules(scripted):
    rules = SpawnRules(tile_values=(8,), tile_weights=(1.0,))
    result = spawn_tile(np.zeros((4, 4), dtype=np.int64), scripted(), rules)
    assert result[0, 0] == 8


def test_spawn_distribution():
    rng = GeneratorSource(seed=0)
    empty = np.zeros((4, 4), dtype=np.int64)
    trials = 20000
    counts = {2: 0, 4: 0}
    positions = np.zeros((4, 4), dtype=np.int64)
    for _ in range(trials):
        result = spawn_tile(empty, rng)
        (r, c), = np.argwhere(result)
        counts[int(result[r, c])] += 1
        positions[r, c] += 1
    assert counts[2] + counts[4] == trials
    assert abs(counts[4] / trials - 0.1) < 0.01
    assert abs(counts[2] / trials - 0.9) < 0.01
    # Every cell is reachable and roughly uniform
    assert positions.min() > trials / 16 * 0.8


def test_generator_source_rejects_empty_range():
    with pytest.raises(ValueError):
        GeneratorSource(seed=1).uniform_index(0)


def test_generator_source_is_reproducible():
    a = GeneratorSource(seed=42)
    b = GeneratorSource(seed=42)
    assert [a.uniform_index(16) for _ in range(10)] == [b.uniform_index(16) for _ in range(10)]
