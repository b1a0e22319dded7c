"""牌的定义 - 三张牌比大小使用的52张扑克牌数据模型"""

from enum import IntEnum, Enum
from dataclasses import dataclass
from typing import List, Optional
import random


class GameError(Exception):
    """游戏异常基类"""


class EmptyDeckError(GameError):
    """牌堆已空，无法再摸牌"""

    def __init__(self, message: str = "Deck is empty. Reset the game."):
        super().__init__(message)


class Rank(IntEnum):
    """点数枚举（数值即点数序号 0-12，越大越强）"""
    TWO = 0
    THREE = 1
    FOUR = 2
    FIVE = 3
    SIX = 4
    SEVEN = 5
    EIGHT = 6
    NINE = 7
    TEN = 8
    JACK = 9
    QUEEN = 10
    KING = 11
    ACE = 12


class Suit(str, Enum):
    """花色枚举（只比较是否相同，不分大小）"""
    HEARTS = "HEARTS"
    DIAMONDS = "DIAMONDS"
    CLUBS = "CLUBS"
    SPADES = "SPADES"

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOL[self]


# 点数显示映射
RANK_DISPLAY = {
    Rank.TWO: "2", Rank.THREE: "3", Rank.FOUR: "4",
    Rank.FIVE: "5", Rank.SIX: "6", Rank.SEVEN: "7",
    Rank.EIGHT: "8", Rank.NINE: "9", Rank.TEN: "10",
    Rank.JACK: "J", Rank.QUEEN: "Q", Rank.KING: "K",
    Rank.ACE: "A",
}

SUIT_SYMBOL = {
    Suit.HEARTS: "♥", Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣", Suit.SPADES: "♠",
}

# 标准顺序：花色为主序，点数为次序
SUIT_ORDER = [Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES]
RANK_ORDER = list(Rank)


@dataclass(frozen=True)
class Card:
    """一张扑克牌"""
    rank: Rank
    suit: Suit

    @property
    def index(self) -> int:
        """点数序号：2 → 0, A → 12"""
        return int(self.rank)

    @property
    def display(self) -> str:
        return f"{self.suit.symbol}{RANK_DISPLAY[self.rank]}"

    def __repr__(self) -> str:
        return self.display


def create_deck() -> List[Card]:
    """创建一副52张标准扑克牌（按花色、点数的固定顺序）"""
    deck = [Card(rank=rank, suit=suit) for suit in SUIT_ORDER for rank in RANK_ORDER]
    assert len(deck) == 52, f"牌数错误: {len(deck)}"
    return deck


def shuffle(deck: List[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """
    Fisher-Yates 洗牌，返回新列表，不修改入参。
    rng: 可注入的随机数发生器，便于测试时固定种子。
    """
    rng = rng or random.Random()
    shuffled = list(deck)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def draw(deck: List[Card]) -> Card:
    """从牌堆顶部（下标0）摸一张牌；牌堆为空时抛出 EmptyDeckError"""
    if not deck:
        raise EmptyDeckError()
    return deck.pop(0)
