from escape_maze.maze import GridPosition, MazeConfig, generate, path_exists


def test_eleven_by_eleven_scenario():
    puzzles = 0
    for seed in range(1, 6):
        m = generate(11, 11, seed=seed)
        assert m.explorer_spawn == GridPosition(1, 1)
        assert m.exit_position == GridPosition(9, 9)
        assert m.grid[9][9] == "E"
        assert path_exists(m.grid, m.explorer_spawn, m.exit_position, doors_open=True)
        if m.fallback:
            continue
        puzzles += 1
        assert not path_exists(m.grid, m.explorer_spawn, m.exit_position, doors_open=False)
    assert puzzles > 0


def test_even_dimensions_round_up_to_odd():
    m = generate(10, 12, seed=2)
    assert (m.width, m.height) == (11, 13)
    assert len(m.grid) == 11 and len(m.grid[0]) == 13
    assert m.exit_position == (9, 11)


def test_outputs_are_row_major_text():
    m = generate(9, 7, seed=5)
    rows = m.to_ascii().split("\n")
    assert len(rows) == 7 and all(len(r) == 9 for r in rows)
    data = m.to_json()
    assert data["grid"] == rows
    assert data["explorer_spawn"] == [1, 1]
    assert data["exit_position"] == [7, 5]
    assert data["seed"] == 5


def test_walkability_and_door_state_helpers():
    for seed in range(1, 10):
        m = generate(15, 15, config=MazeConfig(door_count=3, lever_count=3, seed=seed))
        if m.doors:
            break
    door = m.doors[0]
    assert m.door_at(door.x, door.y) is door
    assert m.door_at(0, 0) is None
    assert not m.is_walkable(door.x, door.y)
    assert m.is_walkable(door.x, door.y, doors_open=True)
    assert not m.is_walkable(-1, 0)
    lever = m.levers[0]
    assert m.lever_at(lever.x, lever.y) is lever
    assert m.is_walkable(lever.x, lever.y)

    opened = m.grid_with_door_state([d.id for d in m.doors])
    assert opened[door.x][door.y] == "F"
    assert m.grid[door.x][door.y] == "D"
    assert path_exists(opened, m.explorer_spawn, m.exit_position, doors_open=False)
