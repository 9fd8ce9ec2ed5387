import pygame
import pytest

from herbsnake.config import SCREEN_MENU, SCREEN_INTRO, SCREEN_HISTORY, SCREEN_GAME


@pytest.fixture
def controller(tmp_path, monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    from herbsnake.controller import GameController

    ctrl = GameController(scores_path=str(tmp_path / "scores.json"))
    yield ctrl
    pygame.quit()


def test_intro_opens_from_menu_and_closes(controller):
    controller._handle_keydown(pygame.K_i)
    assert controller.screen_name == SCREEN_INTRO
    controller._handle_keydown(pygame.K_RIGHT)
    assert controller.screen_name == SCREEN_INTRO
    controller._handle_keydown(pygame.K_ESCAPE)
    assert controller.screen_name == SCREEN_MENU


def test_intro_renders(controller):
    from herbsnake.config import INTRO_SECTIONS, INTRO_TAGLINE

    controller._handle_keydown(pygame.K_i)
    controller.view.render_intro(INTRO_TAGLINE, INTRO_SECTIONS)


def test_history_reset_and_back(controller):
    controller.store.set_best("normal", 7)
    controller._handle_keydown(pygame.K_h)
    assert controller.screen_name == SCREEN_HISTORY
    controller._handle_keydown(pygame.K_x)
    assert controller.store.get_best("normal") == 0
    controller._handle_keydown(pygame.K_ESCAPE)
    assert controller.screen_name == SCREEN_MENU


def test_menu_selection_starts_that_difficulty(controller):
    controller._handle_keydown(pygame.K_2)
    controller._handle_keydown(pygame.K_RETURN)
    assert controller.screen_name == SCREEN_GAME
    assert controller.sim.difficulty == "advanced"
    controller._handle_keydown(pygame.K_ESCAPE)
    assert controller.screen_name == SCREEN_MENU
    assert controller.sim is None
