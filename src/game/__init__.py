# 游戏流程控制模块
from .game_state import GameState, GamePhase, GameEvent, GameOverError, DrawResult
from .controller import GameController, new_game, draw, reset
