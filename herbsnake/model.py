"""
model.py — Board-level model objects.

Owns the grid geometry, the snake body and the herbs on the board.
Zero rendering, zero input handling, zero timing: callers pass the
elapsed seconds in explicitly.

Classes:
    Direction    — immutable (dx, dy) value object
    Grid         — bounds check and free-cell enumeration
    Snake        — body, heading, buffered heading
    Food         — one herb: position, channel, lifetime, flicker
    FoodManager  — the active set of herbs and their lifecycle
"""

import random

from .config import (
    CHANNELS, FOOD_LIFETIME, FOOD_FLASH_WINDOW, FOOD_FLASH_HZ,
    FOOD_MIN, FOOD_MAX, INITIAL_LENGTH,
)


# ─────────────────────────── Direction ───────────────────────────
class Direction:
    """Immutable 2-D unit direction."""
    LEFT  = None  # filled below after class definition
    RIGHT = None
    UP    = None
    DOWN  = None

    __slots__ = ("x", "y", "name")

    def __init__(self, x: int, y: int, name: str = ""):
        self.x = x
        self.y = y
        self.name = name

    def is_opposite(self, other: "Direction") -> bool:
        return self.x == -other.x and self.y == -other.y

    def step(self, cell: tuple[int, int]) -> tuple[int, int]:
        """The neighbouring cell one move away in this direction."""
        return cell[0] + self.x, cell[1] + self.y

    @classmethod
    def from_name(cls, name: str) -> "Direction":
        return _BY_NAME[name.lower()]

    def __eq__(self, other):
        return isinstance(other, Direction) and self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Direction.{self.name.upper()}" if self.name else f"Direction({self.x}, {self.y})"


Direction.LEFT  = Direction(-1,  0, "left")
Direction.RIGHT = Direction( 1,  0, "right")
Direction.UP    = Direction( 0, -1, "up")
Direction.DOWN  = Direction( 0,  1, "down")
ALL_DIRS = [Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT]
_BY_NAME = {d.name: d for d in ALL_DIRS}


# ───────────────────────────── Grid ──────────────────────────────
class Grid:
    """
    Board of rows x cols cells.

    The playable rows run from y = -1 to y = rows - 2. Collision and
    herb placement both use this range, and the view shifts everything
    down by one row when drawing.
    """

    def __init__(self, rows: int, cols: int):
        self.rows = rows
        self.cols = cols

    @property
    def y_range(self) -> range:
        return range(-1, self.rows - 1)

    def in_bounds(self, cell: tuple[int, int]) -> bool:
        x, y = cell
        return 0 <= x < self.cols and -1 <= y < self.rows - 1

    def cells(self) -> list[tuple[int, int]]:
        return [(x, y) for y in self.y_range for x in range(self.cols)]

    def free_cells(self, exclude) -> list[tuple[int, int]]:
        """All in-bound cells not present in `exclude`."""
        blocked = set(exclude)
        return [c for c in self.cells() if c not in blocked]


# ──────────────────────────── Snake ──────────────────────────────
class Snake:
    """
    Pure game data for the snake.
    No rendering. No input handling.
    """

    def __init__(self, body: list[tuple[int, int]], heading: Direction):
        self.body: list[tuple[int, int]] = list(body)
        self.heading: Direction = heading
        self.pending: Direction = heading

    @classmethod
    def spawn(cls, grid: Grid) -> "Snake":
        """Horizontal snake on the middle row, a quarter of the way in, facing right."""
        x0, y0 = grid.cols // 4, grid.rows // 2
        body = [(x0 + i, y0) for i in reversed(range(INITIAL_LENGTH))]
        return cls(body, Direction.RIGHT)

    # ── Accessors ────────────────────────────────────────────────
    @property
    def head(self) -> tuple[int, int]:
        return self.body[0]

    @property
    def cells(self) -> tuple[tuple[int, int], ...]:
        return tuple(self.body)

    def __len__(self) -> int:
        return len(self.body)

    # ── Commands ─────────────────────────────────────────────────
    def request_direction(self, new_dir: Direction) -> None:
        """Queue a direction change (ignored if it would reverse the snake)."""
        if not new_dir.is_opposite(self.heading):
            self.pending = new_dir

    def apply_pending(self) -> None:
        self.heading = self.pending

    def next_head(self) -> tuple[int, int]:
        return self.heading.step(self.head)

    def advance(self, grow: bool = False) -> tuple[int, int]:
        """Apply the buffered heading and move one cell. Returns the new head."""
        self.apply_pending()
        new_head = self.next_head()
        self.body.insert(0, new_head)
        if not grow:
            self.body.pop()
        return new_head

    # ── Queries ──────────────────────────────────────────────────
    def would_collide_with_self(self, cell: tuple[int, int]) -> bool:
        return cell in self.body


# ───────────────────────────── Food ──────────────────────────────
class Food:
    """A single herb. `visible` only drives the flicker; eating ignores it."""

    FLASH_PERIOD = 1.0 / FOOD_FLASH_HZ

    __slots__ = ("position", "channel", "lifetime", "visible", "flash_acc")

    def __init__(self, position: tuple[int, int], channel: str,
                 lifetime: float = FOOD_LIFETIME):
        self.position = position
        self.channel = channel
        self.lifetime = lifetime
        self.visible = True
        self.flash_acc = 0.0

    @property
    def expired(self) -> bool:
        return self.lifetime <= 0

    @property
    def flashing(self) -> bool:
        return 0 < self.lifetime <= FOOD_FLASH_WINDOW

    def age(self, dt: float) -> None:
        self.lifetime -= dt
        if self.expired:
            return
        if self.lifetime > FOOD_FLASH_WINDOW:
            self.visible = True
            self.flash_acc = 0.0
            return
        self.flash_acc += dt
        while self.flash_acc >= self.FLASH_PERIOD:
            self.flash_acc -= self.FLASH_PERIOD
            self.visible = not self.visible

    def __repr__(self):
        return f"Food({self.position}, {self.channel}, {self.lifetime:.2f})"


class FoodManager:
    """
    Keeps between FOOD_MIN and FOOD_MAX herbs on the board.

    Every method takes the cells the snake currently occupies so that new
    herbs never land on it. Running out of free cells is not an error; the
    board simply holds fewer herbs.
    """

    def __init__(self, grid: Grid, rng: random.Random | None = None):
        self.grid = grid
        self.rng = rng or random.Random()
        self.items: list[Food] = []

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    @property
    def positions(self) -> list[tuple[int, int]]:
        return [f.position for f in self.items]

    def clear(self) -> None:
        self.items = []

    def spawn_initial(self, occupied) -> None:
        self.clear()
        for _ in range(self.rng.randint(FOOD_MIN, FOOD_MAX)):
            food = self._make(occupied, self.positions)
            if food is not None:
                self.items.append(food)

    def refill(self, occupied) -> None:
        target = self.rng.randint(FOOD_MIN, FOOD_MAX)
        while len(self.items) < target:
            food = self._make(occupied, self.positions)
            if food is None:
                break
            self.items.append(food)

    def advance(self, dt: float, occupied) -> None:
        """Age every herb by `dt` seconds, swapping expired ones for fresh herbs."""
        taken = set(self.positions)
        kept: list[Food] = []
        for food in self.items:
            food.age(dt)
            if not food.expired:
                kept.append(food)
                continue
            replacement = self._make(occupied, taken)
            if replacement is not None:
                taken.add(replacement.position)
                kept.append(replacement)
        self.items = kept

    def at(self, cell: tuple[int, int]) -> Food | None:
        for food in self.items:
            if food.position == cell:
                return food
        return None

    def remove_at(self, cell: tuple[int, int]) -> Food | None:
        food = self.at(cell)
        if food is not None:
            self.items.remove(food)
        return food

    # ── Private helpers ──────────────────────────────────────────
    def _make(self, occupied, taken) -> Food | None:
        free = self.grid.free_cells(set(occupied) | set(taken))
        if not free:
            return None
        return Food(self.rng.choice(free), self.rng.choice(CHANNELS))
