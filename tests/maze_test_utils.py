from collections import deque

# Tile character constants expected from escape_maze.maze import but we
# keep them duplicated lightly for test independence.
WALL = "W"
FLOOR = "F"
DOOR = "D"
LEVER = "L"
EXIT = "E"


def grid_from_rows(rows):
    """Build a column-major grid (grid[x][y]) from row strings, top row first."""
    height = len(rows)
    width = len(rows[0])
    return [[rows[y][x] for y in range(height)] for x in range(width)]


def bfs_reachable(grid, start, doors_open=False):
    """Return set of (x,y) reachable from start; WALL always blocks, DOOR unless doors_open."""
    w = len(grid)
    h = len(grid[0])
    q = deque([tuple(start)])
    vis = {tuple(start)}
    while q:
        x, y = q.popleft()
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nx, ny = x + dx, y + dy
            if 0 <= nx < w and 0 <= ny < h and (nx, ny) not in vis:
                t = grid[nx][ny]
                if t == WALL or (t == DOOR and not doors_open):
                    continue
                vis.add((nx, ny))
                q.append((nx, ny))
    return vis


def iter_tiles(grid, tile):
    w = len(grid)
    h = len(grid[0])
    for x in range(w):
        for y in range(h):
            if grid[x][y] == tile:
                yield x, y


def open_cells(grid):
    """Every non-WALL cell."""
    w = len(grid)
    h = len(grid[0])
    return {(x, y) for x in range(w) for y in range(h) if grid[x][y] != WALL}


def node_cells(grid):
    return {(x, y) for (x, y) in open_cells(grid) if x % 2 == 1 and y % 2 == 1}


def passage_cells(grid):
    return {(x, y) for (x, y) in open_cells(grid) if (x % 2 == 0) != (y % 2 == 0)}
