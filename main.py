"""
main.py — Entry point.

Run with:
    python main.py

Requires:
    pip install pygame

Best scores are kept in ~/.herbsnake_scores.json (override with the
HERBSNAKE_SCORES environment variable). Background music is read from
herbsnake/music/music1.mp3 .. music3.mp3 when present.
"""

import logging

from herbsnake.controller import GameController


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(name)s] %(levelname)s: %(message)s")
    GameController().run()


if __name__ == "__main__":
    main()
