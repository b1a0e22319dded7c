"""牌型定义 - 三张牌的6种牌型及评估结果"""

from enum import IntEnum
from dataclasses import dataclass


class HandCategory(IntEnum):
    """牌型枚举（数值越小牌型越大）"""
    STRAIGHT_FLUSH = 1    # 同花顺
    THREE_OF_A_KIND = 2   # 三条
    STRAIGHT = 3          # 顺子
    FLUSH = 4             # 同花
    PAIR = 5              # 对子
    HIGH_CARD = 6         # 高牌

    @property
    def label(self) -> str:
        return CATEGORY_LABEL[self]


CATEGORY_LABEL = {
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.FLUSH: "Flush",
    HandCategory.PAIR: "Pair",
    HandCategory.HIGH_CARD: "High Card",
}


@dataclass(frozen=True)
class HandRank:
    """一手牌的评估结果"""
    category: HandCategory
    tiebreak: int          # 手牌中最大的点数序号

    def __repr__(self) -> str:
        return f"[{self.category.label}] high={self.tiebreak}"
