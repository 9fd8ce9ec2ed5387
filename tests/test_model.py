import random

import pytest

from herbsnake.config import FOOD_LIFETIME
from herbsnake.model import ALL_DIRS, Direction, Food, FoodManager, Grid, Snake


# ── Direction ─────────────────────────────────────────────────────
def test_opposites():
    assert Direction.UP.is_opposite(Direction.DOWN)
    assert Direction.LEFT.is_opposite(Direction.RIGHT)
    assert not Direction.UP.is_opposite(Direction.LEFT)
    assert not Direction.UP.is_opposite(Direction.UP)


@pytest.mark.parametrize("name", ["up", "down", "left", "right", "UP"])
def test_from_name(name):
    d = Direction.from_name(name)
    assert d in ALL_DIRS
    assert d.name == name.lower()


def test_from_name_unknown():
    with pytest.raises(KeyError):
        Direction.from_name("sideways")


def test_step():
    assert Direction.UP.step((3, 3)) == (3, 2)
    assert Direction.RIGHT.step((3, 3)) == (4, 3)


# ── Grid ──────────────────────────────────────────────────────────
def test_bounds_are_shifted_up_one_row():
    grid = Grid(20, 20)
    assert grid.in_bounds((0, -1))
    assert grid.in_bounds((19, 18))
    assert not grid.in_bounds((0, -2))
    assert not grid.in_bounds((0, 19))
    assert not grid.in_bounds((-1, 5))
    assert not grid.in_bounds((20, 5))


def test_cells_cover_exactly_the_board():
    grid = Grid(4, 3)
    cells = grid.cells()
    assert len(cells) == 12
    assert all(grid.in_bounds(c) for c in cells)
    assert min(y for _, y in cells) == -1
    assert max(y for _, y in cells) == 2


def test_free_cells_excludes():
    grid = Grid(2, 2)
    assert set(grid.free_cells([(0, -1), (1, 0)])) == {(1, -1), (0, 0)}
    assert grid.free_cells(grid.cells()) == []


# ── Snake ─────────────────────────────────────────────────────────
def test_spawn_layout():
    snake = Snake.spawn(Grid(20, 20))
    assert snake.cells == ((7, 10), (6, 10), (5, 10))
    assert snake.heading == Direction.RIGHT
    assert snake.pending == Direction.RIGHT


def test_reverse_request_is_ignored():
    snake = Snake.spawn(Grid(20, 20))
    snake.request_direction(Direction.LEFT)
    assert snake.pending == Direction.RIGHT
    snake.request_direction(Direction.UP)
    assert snake.pending == Direction.UP


def test_pending_heading_applies_on_advance_only():
    snake = Snake.spawn(Grid(20, 20))
    snake.request_direction(Direction.DOWN)
    assert snake.heading == Direction.RIGHT
    head = snake.advance()
    assert snake.heading == Direction.DOWN
    assert head == (7, 11)


def test_advance_keeps_length():
    snake = Snake.spawn(Grid(20, 20))
    snake.advance()
    assert snake.cells == ((8, 10), (7, 10), (6, 10))


def test_advance_grow_keeps_tail():
    snake = Snake.spawn(Grid(20, 20))
    snake.advance(grow=True)
    assert snake.cells == ((8, 10), (7, 10), (6, 10), (5, 10))


def test_would_collide_with_self():
    snake = Snake([(5, 5), (5, 4), (6, 4)], Direction.DOWN)
    assert snake.would_collide_with_self((6, 4))
    assert not snake.would_collide_with_self((5, 6))


# ── Food ──────────────────────────────────────────────────────────
def test_food_stays_visible_outside_flash_window():
    food = Food((0, 0), "red", lifetime=5.0)
    food.visible = False
    food.flash_acc = 0.2
    food.age(1.0)
    assert food.lifetime == pytest.approx(4.0)
    assert food.visible
    assert food.flash_acc == 0.0


def test_food_flickers_at_three_hertz():
    food = Food((0, 0), "green", lifetime=3.5)
    food.age(0.3)          # 3.2 left, not flashing yet
    assert food.visible and food.flash_acc == 0.0
    food.age(0.3)          # 2.9 left, 0.3 accumulated
    assert food.visible
    assert food.flash_acc == pytest.approx(0.3)
    food.age(0.3)          # 0.6 accumulated -> one flip
    assert not food.visible
    assert food.flash_acc == pytest.approx(0.6 - 1 / 3)


def test_large_step_flips_more_than_once():
    food = Food((0, 0), "blue", lifetime=3.5)
    food.age(0.9)          # 2.6 left, 0.9 accumulated -> two flips
    assert food.visible
    assert food.flash_acc == pytest.approx(0.9 - 2 / 3)


def test_food_expires():
    food = Food((0, 0), "red", lifetime=0.5)
    food.age(0.5)
    assert food.expired
    assert not food.flashing


# ── FoodManager ───────────────────────────────────────────────────
def make_manager(rows=20, cols=20, seed=7):
    return FoodManager(Grid(rows, cols), random.Random(seed))


def test_spawn_initial_count_and_placement():
    snake = Snake.spawn(Grid(20, 20))
    for seed in range(30):
        foods = make_manager(seed=seed)
        foods.spawn_initial(snake.body)
        assert 1 <= len(foods) <= 3
        positions = foods.positions
        assert len(set(positions)) == len(positions)
        assert not set(positions) & set(snake.body)
        for food in foods:
            assert food.channel in ("red", "green", "blue")
            assert food.lifetime == FOOD_LIFETIME
            assert food.visible


def test_spawn_initial_clears_previous():
    foods = make_manager()
    foods.items = [Food((0, 0), "red") for _ in range(3)]
    foods.spawn_initial([])
    assert all(f.lifetime == FOOD_LIFETIME for f in foods)
    assert len(set(foods.positions)) == len(foods)


def test_spawn_uses_shifted_rows():
    grid = Grid(3, 2)
    foods = FoodManager(grid, random.Random(3))
    seen = set()
    for _ in range(200):
        foods.spawn_initial([])
        seen.update(foods.positions)
    assert seen == set(grid.cells())
    assert all(-1 <= y <= 1 for _, y in seen)


def test_refill_tops_up_to_at_least_one():
    foods = make_manager()
    foods.clear()
    foods.refill([])
    assert 1 <= len(foods) <= 3


def test_refill_never_removes():
    foods = make_manager()
    foods.items = [Food((x, 0), "red") for x in range(3)]
    foods.refill([])
    assert len(foods) == 3


def test_full_board_is_a_silent_noop():
    grid = Grid(2, 2)
    foods = FoodManager(grid, random.Random(1))
    foods.spawn_initial(grid.cells())
    assert len(foods) == 0
    foods.refill(grid.cells())
    assert len(foods) == 0


def test_expired_food_is_replaced():
    foods = make_manager()
    old = Food((0, 0), "red", lifetime=0.2)
    foods.items = [old]
    foods.advance(0.3, [(5, 5)])
    assert len(foods) == 1
    assert foods.items[0] is not old
    assert foods.items[0].lifetime == FOOD_LIFETIME
    assert foods.items[0].position != (5, 5)


def test_expired_food_without_room_just_disappears():
    grid = Grid(2, 2)
    foods = FoodManager(grid, random.Random(1))
    foods.items = [Food((0, -1), "red", lifetime=0.1)]
    foods.advance(0.3, [(1, -1), (0, 0), (1, 0)])
    # the expired herb's own cell is still excluded while replacing it
    assert len(foods) == 0


def test_replacements_do_not_overlap():
    for seed in range(20):
        foods = make_manager(rows=3, cols=3, seed=seed)
        foods.items = [Food((x, -1), "red", lifetime=0.1) for x in range(3)]
        foods.advance(0.3, [(0, 0), (1, 0)])
        positions = foods.positions
        assert len(set(positions)) == len(positions) == 3
        assert not set(positions) & {(0, 0), (1, 0)}


def test_food_expiry_at_fixed_tick():
    # 12 s herb aged by 0.30 s ticks: flickers from tick 30, gone on tick 40
    foods = make_manager()
    original = Food((0, 0), "red")
    foods.items = [original]
    for tick in range(1, 40):
        foods.advance(0.30, [])
        assert original in foods.items
        if tick < 30:
            assert not original.flashing
            assert original.flash_acc == 0.0
            assert original.visible
        else:
            assert original.flashing
        if tick == 30:
            assert original.flash_acc > 0.0
            assert original.visible
        if tick == 31:
            assert not original.visible
    foods.advance(0.30, [])
    assert original not in foods.items
    assert len(foods) == 1


def test_remove_at():
    foods = make_manager()
    foods.items = [Food((1, 1), "red"), Food((2, 2), "blue")]
    eaten = foods.remove_at((2, 2))
    assert eaten.channel == "blue"
    assert foods.positions == [(1, 1)]
    assert foods.remove_at((9, 9)) is None
