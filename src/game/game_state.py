"""游戏状态 - 三张牌一局游戏的不可变状态"""

from enum import Enum
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from src.engine.card import Card, GameError
from src.engine.hand_type import HandRank
from src.engine.hand_evaluator import DEFAULT_TIE_WINNER


PLAYERS = (1, 2)


class GameOverError(GameError):
    """本局已结束，只能重置"""

    def __init__(self, message: str = "Game is over. Reset the game."):
        super().__init__(message)


class GamePhase(str, Enum):
    """游戏阶段"""
    AWAITING_DRAW = "AWAITING_DRAW"   # 等待当前玩家摸牌
    EVALUATING = "EVALUATING"         # 比牌中
    FINISHED = "FINISHED"             # 已结束


@dataclass
class GameEvent:
    """游戏事件记录"""
    phase: GamePhase
    player_id: Optional[int]
    action: str                  # "draw", "empty_deck", "game_over_draw", "result", "reset"
    data: Any = None             # Card / GameError / 获胜方 / None


@dataclass(frozen=True)
class GameState:
    """一局游戏的完整状态（每次状态转移都生成新对象）"""
    deck: Tuple[Card, ...]
    hand1: Tuple[Card, ...] = ()
    hand2: Tuple[Card, ...] = ()
    current_player: int = 1          # 当前摸牌玩家 1/2
    draw_count: int = 0              # 当前玩家本轮已摸张数
    phase: GamePhase = GamePhase.AWAITING_DRAW
    winner: Optional[int] = None

    # 结算相关
    ranks: Optional[Tuple[HandRank, HandRank]] = None
    tie_winner: int = DEFAULT_TIE_WINNER

    @property
    def game_over(self) -> bool:
        return self.phase == GamePhase.FINISHED

    @property
    def active_hand(self) -> Tuple[Card, ...]:
        return self.hand_of(self.current_player)

    def hand_of(self, player: int) -> Tuple[Card, ...]:
        """返回指定玩家（1/2）的手牌"""
        if player == 1:
            return self.hand1
        if player == 2:
            return self.hand2
        raise ValueError(f"玩家编号只能是 1 或 2: {player}")

    def rank_of(self, player: int) -> Optional[HandRank]:
        """返回指定玩家的评估结果，比牌前为 None"""
        if self.ranks is None:
            return None
        return self.ranks[PLAYERS.index(player)]


@dataclass(frozen=True)
class DrawResult:
    """一次摸牌的结果：成功时带 card，失败时带 error"""
    player: int
    card: Optional[Card] = None
    error: Optional[GameError] = None

    @property
    def ok(self) -> bool:
        return self.error is None
