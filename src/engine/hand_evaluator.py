"""牌型评估器 - 识别三张牌的牌型并比较两手牌的大小"""

from typing import List, Sequence
from collections import Counter

from .card import Card
from .hand_type import HandCategory, HandRank


HAND_SIZE = 3

# 完全平局时默认判 2 号位获胜
DEFAULT_TIE_WINNER = 2


def evaluate_hand(cards: Sequence[Card]) -> HandRank:
    """
    评估一手三张牌。
    返回 HandRank(category, tiebreak)，tiebreak 恒为最大点数序号。
    """
    if len(cards) != HAND_SIZE:
        raise ValueError(f"手牌必须是 {HAND_SIZE} 张，实际 {len(cards)} 张")

    indices = sorted(c.index for c in cards)
    rank_counts = Counter(c.rank for c in cards)

    # 按检测优先级依次尝试，先命中者为准
    # 同花顺 > 三条 > 顺子 > 同花 > 对子 > 高牌
    if _is_flush(cards) and _is_straight(indices):
        category = HandCategory.STRAIGHT_FLUSH
    elif len(rank_counts) == 1:
        category = HandCategory.THREE_OF_A_KIND
    elif _is_straight(indices):
        category = HandCategory.STRAIGHT
    elif _is_flush(cards):
        category = HandCategory.FLUSH
    elif len(rank_counts) < HAND_SIZE:
        category = HandCategory.PAIR
    else:
        category = HandCategory.HIGH_CARD

    return HandRank(category=category, tiebreak=indices[-1])


# ============================================================
#  辅助函数
# ============================================================

def _is_flush(cards: Sequence[Card]) -> bool:
    """三张同花色"""
    return len({c.suit for c in cards}) == 1


def _is_straight(indices: List[int]) -> bool:
    """已排序的点数序号严格连续（A 不能当 1 用）"""
    return all(indices[i + 1] - indices[i] == 1 for i in range(len(indices) - 1))


# ============================================================
#  比较
# ============================================================

def compare_ranks(rank_a: HandRank, rank_b: HandRank, tie_winner: int = DEFAULT_TIE_WINNER) -> int:
    """
    比较两个评估结果，返回获胜方：1 或 2。
    规则：
    1. 牌型不同，数值小者胜
    2. 牌型相同，比最大点数
    3. 完全相同，由 tie_winner 决定
    """
    if tie_winner not in (1, 2):
        raise ValueError(f"tie_winner 只能是 1 或 2: {tie_winner}")

    if rank_a.category != rank_b.category:
        return 1 if rank_a.category < rank_b.category else 2
    if rank_a.tiebreak != rank_b.tiebreak:
        return 1 if rank_a.tiebreak > rank_b.tiebreak else 2
    return tie_winner


def compare_hands(
    hand_a: Sequence[Card],
    hand_b: Sequence[Card],
    tie_winner: int = DEFAULT_TIE_WINNER,
) -> int:
    """比较两手牌，返回获胜方：1 = hand_a，2 = hand_b"""
    return compare_ranks(evaluate_hand(hand_a), evaluate_hand(hand_b), tie_winner)
