"""游戏控制器 - 驱动三张牌一局游戏的摸牌、比牌与重置"""

import dataclasses
import logging
import random
from typing import Callable, List, Optional, Tuple

from src.engine.card import EmptyDeckError, create_deck, shuffle
from src.engine.card import draw as draw_card
from src.engine.hand_evaluator import HAND_SIZE, DEFAULT_TIE_WINNER, evaluate_hand, compare_ranks
from src.game.game_state import GameState, GamePhase, GameEvent, GameOverError, DrawResult

logger = logging.getLogger(__name__)


# ============================================================
#  纯状态转移函数
# ============================================================

def new_game(rng: Optional[random.Random] = None, tie_winner: int = DEFAULT_TIE_WINNER) -> GameState:
    """开新局：洗好一副牌，两手牌为空，1号玩家先摸"""
    if tie_winner not in (1, 2):
        raise ValueError(f"tie_winner 只能是 1 或 2: {tie_winner}")
    deck = shuffle(create_deck(), rng)
    return GameState(deck=tuple(deck), tie_winner=tie_winner)


def reset(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    """重置：任何阶段都可调用，换一副新洗的牌，保留平局规则"""
    return new_game(rng, state.tie_winner)


def draw(state: GameState) -> Tuple[GameState, DrawResult]:
    """
    当前玩家摸一张牌。
    返回 (新状态, DrawResult)；失败时状态原样返回。
    """
    player = state.current_player

    if state.phase != GamePhase.AWAITING_DRAW:
        return state, DrawResult(player=player, error=GameOverError())

    deck = list(state.deck)
    try:
        card = draw_card(deck)
    except EmptyDeckError as e:
        return state, DrawResult(player=player, error=e)

    hand = state.active_hand + (card,)
    draw_count = state.draw_count + 1
    if player == 1:
        state = dataclasses.replace(state, deck=tuple(deck), hand1=hand, draw_count=draw_count)
    else:
        state = dataclasses.replace(state, deck=tuple(deck), hand2=hand, draw_count=draw_count)

    if len(hand) == HAND_SIZE:
        if player == 1:
            # 1号摸满三张，轮到2号
            state = dataclasses.replace(state, current_player=2, draw_count=0)
        else:
            state = _evaluate(dataclasses.replace(state, phase=GamePhase.EVALUATING))

    return state, DrawResult(player=player, card=card)


def _evaluate(state: GameState) -> GameState:
    """两手牌都满后立即比牌，结束本局"""
    rank1 = evaluate_hand(state.hand1)
    rank2 = evaluate_hand(state.hand2)
    winner = compare_ranks(rank1, rank2, state.tie_winner)
    return dataclasses.replace(
        state,
        ranks=(rank1, rank2),
        winner=winner,
        phase=GamePhase.FINISHED,
    )


# ============================================================
#  有状态包装（供 UI 使用）
# ============================================================

class GameController:
    """游戏控制器：持有当前状态，并在每次状态转移时通知 UI"""

    def __init__(self, rng: Optional[random.Random] = None, tie_winner: int = DEFAULT_TIE_WINNER):
        self.rng = rng or random.Random()
        self.state = new_game(self.rng, tie_winner)
        self._callbacks: List[Callable[[GameEvent], None]] = []

    def on_event(self, callback: Callable[[GameEvent], None]) -> None:
        """注册事件回调"""
        self._callbacks.append(callback)

    def _emit(self, event: GameEvent) -> None:
        """触发事件通知"""
        for cb in self._callbacks:
            cb(event)

    def draw(self) -> DrawResult:
        """当前玩家摸一张牌；比牌在摸到第6张时同步完成"""
        self.state, result = draw(self.state)
        s = self.state

        if not result.ok:
            action = "empty_deck" if isinstance(result.error, EmptyDeckError) else "game_over_draw"
            logger.warning("player %d draw refused: %s", result.player, result.error)
            self._emit(GameEvent(s.phase, result.player, action, result.error))
            return result

        logger.debug("player %d drew %r (%d left in deck)", result.player, result.card, len(s.deck))
        self._emit(GameEvent(s.phase, result.player, "draw", result.card))

        if s.game_over:
            logger.info("game over: player %d wins (%r vs %r)", s.winner, s.ranks[0], s.ranks[1])
            self._emit(GameEvent(s.phase, s.winner, "result", s.winner))
        return result

    def reset(self) -> GameState:
        """重置为新的一局"""
        self.state = reset(self.state, self.rng)
        logger.info("game reset")
        self._emit(GameEvent(self.state.phase, None, "reset"))
        return self.state

    def run_game(self) -> GameState:
        """连续摸牌直到本局结束"""
        while not self.state.game_over:
            result = self.draw()
            if not result.ok:
                break
        return self.state
