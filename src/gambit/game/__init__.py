"""Game orchestration layer: controller, events and interfaces.

Quick start::

    from gambit.core import Color, Move, parse_square
    from gambit.game import GameController

    ctrl = GameController()
    ctrl.set_ai_color(Color.BLACK)
    ctrl.set_ai_enabled(True)
    ctrl.make_move(Move(parse_square("e2"), parse_square("e4")))  # AI replies
"""

from gambit.game.controller import GameController, GameEvents, game_over_message
from gambit.game.interfaces import IGameController

__all__ = [
    "GameController",
    "GameEvents",
    "IGameController",
    "game_over_message",
]
