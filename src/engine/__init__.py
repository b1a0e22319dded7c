# 游戏引擎模块
from .card import Card, Rank, Suit, GameError, EmptyDeckError, create_deck, shuffle, draw
from .hand_type import HandCategory, HandRank
from .hand_evaluator import evaluate_hand, compare_hands, compare_ranks
