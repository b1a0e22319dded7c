"""游戏控制器单元测试 - 摸牌流程、比牌、重置、异常"""

import dataclasses
import random

import pytest
from src.engine.card import Card, Rank, Suit, EmptyDeckError
from src.engine.hand_type import HandCategory
from src.game.game_state import GameState, GamePhase, GameOverError
from src.game.controller import GameController, new_game, draw, reset


# ============================================================
#  辅助工具
# ============================================================

H, D, C, S = Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES


def _rigged(cards, tie_winner: int = 2) -> GameState:
    """构造一个牌堆顺序已知的新局"""
    return GameState(deck=tuple(cards), tie_winner=tie_winner)


def _draw_n(state: GameState, n: int) -> GameState:
    for _ in range(n):
        state, result = draw(state)
        assert result.ok
    return state


# ============================================================
#  开局
# ============================================================

class TestNewGame:

    def test_initial_state(self):
        s = new_game(random.Random(1))
        assert len(s.deck) == 52
        assert len(set(s.deck)) == 52
        assert s.hand1 == () and s.hand2 == ()
        assert s.current_player == 1
        assert s.draw_count == 0
        assert s.phase == GamePhase.AWAITING_DRAW
        assert s.game_over is False
        assert s.winner is None

    def test_seeded_games_repeat(self):
        assert new_game(random.Random(5)).deck == new_game(random.Random(5)).deck

    def test_invalid_tie_winner(self):
        with pytest.raises(ValueError):
            new_game(tie_winner=0)


# ============================================================
#  摸牌流程
# ============================================================

class TestDraw:

    def test_first_draw(self):
        s = new_game(random.Random(1))
        top = s.deck[0]
        s2, result = draw(s)
        assert result.ok and result.card == top and result.player == 1
        assert s2.hand1 == (top,)
        assert len(s2.deck) == 51
        assert s2.draw_count == 1
        # 原状态不变
        assert len(s.deck) == 52 and s.hand1 == ()

    def test_turn_passes_after_three(self):
        s = _draw_n(new_game(random.Random(2)), 3)
        assert len(s.hand1) == 3
        assert s.current_player == 2
        assert s.draw_count == 0
        assert s.phase == GamePhase.AWAITING_DRAW

    def test_draw_count_mirrors_active_hand(self):
        s = new_game(random.Random(3))
        for _ in range(5):
            s, _ = draw(s)
            if not s.game_over:
                assert s.draw_count == len(s.active_hand)

    def test_six_draws_finish_game(self):
        s = _draw_n(new_game(random.Random(4)), 6)
        assert s.game_over is True
        assert s.phase == GamePhase.FINISHED
        assert s.winner in (1, 2)
        assert len(s.hand1) == 3 and len(s.hand2) == 3
        assert len(s.deck) == 46
        assert s.rank_of(1) is not None and s.rank_of(2) is not None

    def test_winner_from_rigged_deck(self):
        p1 = [Card(Rank.TWO, H), Card(Rank.THREE, H), Card(Rank.FOUR, H)]
        p2 = [Card(Rank.TWO, D), Card(Rank.TWO, C), Card(Rank.NINE, C)]
        s = _draw_n(_rigged(p1 + p2), 6)
        assert s.hand1 == tuple(p1) and s.hand2 == tuple(p2)
        assert s.rank_of(1).category == HandCategory.STRAIGHT_FLUSH
        assert s.rank_of(2).category == HandCategory.PAIR
        assert s.winner == 1

    def test_exact_tie_uses_policy(self):
        p1 = [Card(Rank.TWO, H), Card(Rank.FIVE, D), Card(Rank.NINE, C)]
        p2 = [Card(Rank.THREE, S), Card(Rank.SIX, H), Card(Rank.NINE, D)]
        assert _draw_n(_rigged(p1 + p2), 6).winner == 2
        assert _draw_n(_rigged(p1 + p2, tie_winner=1), 6).winner == 1

    def test_empty_deck_does_not_mutate(self):
        s = _rigged([Card(Rank.ACE, S)])
        s = _draw_n(s, 1)
        s2, result = draw(s)
        assert s2 is s
        assert not result.ok
        assert isinstance(result.error, EmptyDeckError)
        assert result.card is None

    def test_draw_after_game_over_refused(self):
        s = _draw_n(new_game(random.Random(6)), 6)
        s2, result = draw(s)
        assert s2 is s
        assert isinstance(result.error, GameOverError)


# ============================================================
#  重置
# ============================================================

class TestReset:

    @pytest.mark.parametrize("draws", [0, 2, 4, 6])
    def test_reset_restores_initial_shape(self, draws):
        s = _draw_n(new_game(random.Random(7)), draws)
        s = reset(s, random.Random(8))
        assert s.draw_count == 0
        assert s.hand1 == () and s.hand2 == ()
        assert s.game_over is False
        assert s.winner is None
        assert s.current_player == 1
        assert len(s.deck) == 52 and len(set(s.deck)) == 52

    def test_reset_keeps_tie_policy(self):
        s = reset(new_game(tie_winner=1))
        assert s.tie_winner == 1

    def test_reset_after_empty_deck(self):
        s = reset(_rigged([]))
        assert len(s.deck) == 52


# ============================================================
#  有状态控制器 + 事件
# ============================================================

class TestGameController:

    def setup_method(self):
        self.gc = GameController(rng=random.Random(9))
        self.events = []
        self.gc.on_event(self.events.append)

    def test_run_game_emits_draws_and_result(self):
        state = self.gc.run_game()
        assert state.game_over
        actions = [e.action for e in self.events]
        assert actions == ["draw"] * 6 + ["result"]
        assert self.events[-1].data == state.winner

    def test_draw_event_carries_post_draw_phase(self):
        self.gc.run_game()
        draws = [e for e in self.events if e.action == "draw"]
        assert all(e.phase == GamePhase.AWAITING_DRAW for e in draws[:5])
        assert draws[5].phase == GamePhase.FINISHED

    def test_draw_after_game_over_emits_warning_event(self):
        self.gc.run_game()
        result = self.gc.draw()
        assert not result.ok
        assert self.events[-1].action == "game_over_draw"

    def test_empty_deck_event(self):
        self.gc.state = dataclasses.replace(self.gc.state, deck=())
        result = self.gc.draw()
        assert isinstance(result.error, EmptyDeckError)
        assert self.events[-1].action == "empty_deck"
        assert self.gc.state.hand1 == ()

    def test_reset(self):
        self.gc.run_game()
        state = self.gc.reset()
        assert state is self.gc.state
        assert not state.game_over
        assert self.events[-1].action == "reset"
