"""终端可视化渲染器 - 在终端中展示三张牌对局过程"""

import os
import time
from typing import Sequence

from src.engine.card import Card, Suit
from src.game.game_state import GameState, GamePhase, GameEvent


# 颜色常量 (ANSI)
RED = "\033[91m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
CYAN = "\033[96m"
BOLD = "\033[1m"
DIM = "\033[2m"
RESET = "\033[0m"

# 玩家颜色映射
PLAYER_COLOR = {1: CYAN, 2: GREEN}


class TerminalRenderer:
    """终端可视化渲染器"""

    def __init__(self, delay: float = 0.8):
        self.delay = delay  # 每步之间的延迟（秒）

    def clear(self) -> None:
        """清屏"""
        os.system("clear" if os.name != "nt" else "cls")

    def pause(self, seconds: float = 0) -> None:
        """暂停"""
        time.sleep(seconds or self.delay)

    # ============================================================
    #  牌面渲染
    # ============================================================

    @staticmethod
    def format_cards(cards: Sequence[Card]) -> str:
        """将牌列表格式化为彩色字符串"""
        if not cards:
            return f"{DIM}No cards drawn yet{RESET}"
        parts = []
        for c in cards:
            # 红色花色高亮
            if c.suit in (Suit.HEARTS, Suit.DIAMONDS):
                parts.append(f"{RED}{c.display}{RESET}")
            else:
                parts.append(c.display)
        return " ".join(parts)

    @staticmethod
    def format_player_name(player: int) -> str:
        color = PLAYER_COLOR.get(player, DIM)
        return f"{color}{BOLD}Player {player}{RESET}"

    def print_header(self, title: str) -> None:
        """打印带框的标题"""
        print(f"\n{YELLOW}{BOLD}{'═' * 60}{RESET}")
        print(f"{YELLOW}{BOLD}  {title}{RESET}")
        print(f"{YELLOW}{BOLD}{'═' * 60}{RESET}\n")

    # ============================================================
    #  对局展示
    # ============================================================

    @staticmethod
    def prompt(state: GameState) -> str:
        """当前可执行操作的提示文本"""
        if state.game_over:
            return "Reset Game"
        return f"{TerminalRenderer.format_player_name(state.current_player)}: Draw Card ({state.draw_count}/3)"

    def show_hands(self, state: GameState) -> None:
        """展示两位玩家当前手牌"""
        for player in (1, 2):
            name = self.format_player_name(player)
            line = f"  {name}'s Hand: {self.format_cards(state.hand_of(player))}"
            rank = state.rank_of(player)
            if rank is not None:
                line += f"  {DIM}[{rank.category.label}]{RESET}"
            print(line)
        print()

    def show_draw(self, player: int, card: Card) -> None:
        """展示一次摸牌"""
        print(f"  {self.format_player_name(player)} draws {self.format_cards([card])}")

    def show_warning(self, message: str) -> None:
        print(f"  {YELLOW}⚠ {message}{RESET}")

    def show_result(self, state: GameState) -> None:
        """展示游戏结果"""
        self.print_header("🏆 Game Over")
        self.show_hands(state)
        print(f"  {self.format_player_name(state.winner)} wins!\n")

    # ============================================================
    #  事件回调（注册到 GameController）
    # ============================================================

    def make_event_callback(self, controller):
        """创建事件回调函数，供 GameController.on_event() 使用"""
        renderer = self

        def callback(event: GameEvent) -> None:
            if event.action == "draw":
                renderer.show_draw(event.player_id, event.data)
                renderer.pause()
            elif event.action in ("empty_deck", "game_over_draw"):
                renderer.show_warning(str(event.data))
            elif event.phase == GamePhase.FINISHED and event.action == "result":
                renderer.show_result(controller.state)
            elif event.action == "reset":
                renderer.print_header("🃏 New game: deck shuffled")

        return callback
