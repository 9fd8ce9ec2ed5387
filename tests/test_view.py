import pygame
import pytest

from herbsnake.config import (
    CELL, OFFSET_X, OFFSET_Y, GAME_H, BOARD_ROWS, BOARD_COLS, INTRO_SECTIONS,
)
from herbsnake.model import Grid
from herbsnake.view import cell_rect, wrap_text


@pytest.fixture
def font():
    pygame.font.init()
    yield pygame.font.Font(None, 16)
    pygame.font.quit()


def test_top_playable_row_is_drawn_at_board_top():
    assert cell_rect((0, -1)).topleft == (OFFSET_X, OFFSET_Y)


def test_every_playable_cell_is_on_the_board():
    grid = Grid(BOARD_ROWS, BOARD_COLS)
    for cell in grid.cells():
        rect = cell_rect(cell)
        assert rect.size == (CELL, CELL)
        assert OFFSET_Y <= rect.top and rect.bottom <= OFFSET_Y + GAME_H


def test_wrap_keeps_every_word_in_order(font):
    text = "every herb adds a little of its pigment to the snake " * 4
    lines = wrap_text(text, font, 160)
    assert len(lines) > 1
    assert " ".join(lines).split() == text.split()
    for line in lines:
        assert font.size(line)[0] <= 160 or " " not in line


def test_wrap_short_and_empty_text(font):
    assert wrap_text("hiss", font, 400) == ["hiss"]
    assert wrap_text("", font, 400) == []


def test_intro_covers_both_modes_and_the_losing_rule():
    text = " ".join(p for _, paragraphs in INTRO_SECTIONS for p in paragraphs)
    assert "NORMAL" in text and "ADVANCED" in text
    assert "wall" in text and "own body" in text
