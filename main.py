"""三张牌比大小 - 主入口"""

import argparse
import logging
import random

from src.game.controller import GameController
from src.ui.renderer import TerminalRenderer


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def run_interactive(gc: GameController, renderer: TerminalRenderer) -> None:
    """交互模式：回车/d 摸牌，r 重置，q 退出"""
    while True:
        if not gc.state.game_over:
            # 结束时 show_result 已展示过手牌
            renderer.show_hands(gc.state)
        try:
            cmd = input(f"  [{renderer.prompt(gc.state)}] (Enter/d=draw, r=reset, q=quit) > ")
        except EOFError:
            break
        cmd = cmd.strip().lower()

        if cmd == "q":
            break
        if cmd == "r":
            gc.reset()
        elif cmd in ("", "d"):
            if gc.state.game_over:
                # 结束后按钮只剩"重置"
                gc.reset()
            else:
                gc.draw()
        else:
            renderer.show_warning(f"Unknown command: {cmd}")


def run_auto(gc: GameController, rounds: int) -> None:
    """自动模式：连续打完若干局"""
    for i in range(rounds):
        if i > 0:
            gc.reset()
        if rounds > 1:
            print(f"\n{'=' * 60}")
            print(f"  Game {i + 1}/{rounds}")
            print(f"{'=' * 60}")
        gc.run_game()


def main(argv=None):
    """命令行入口"""
    parser = argparse.ArgumentParser(description="Three-Cards: two players, three cards each")
    parser.add_argument("--seed", type=int, default=None, help="随机种子 (默认不固定)")
    parser.add_argument("--tie-winner", type=int, choices=(1, 2), default=2, help="完全平局时的获胜方 (默认2)")
    parser.add_argument("--auto", action="store_true", help="自动摸牌，无需输入")
    parser.add_argument("--rounds", type=int, default=1, help="自动模式对局数 (默认1)")
    parser.add_argument("--delay", type=float, default=0.4, help="自动模式摸牌延迟秒数 (默认0.4)")
    parser.add_argument("--fast", action="store_true", help="快速模式 (无延迟)")
    parser.add_argument("--web", action="store_true", help="启动 Web 服务")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument(
        "--log-level", type=str.upper, default="WARNING", choices=LOG_LEVELS, help="日志级别 (默认WARNING)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.web:
        import uvicorn
        uvicorn.run("src.web.server:app", host=args.host, port=args.port)
        return

    rng = random.Random(args.seed)
    gc = GameController(rng=rng, tie_winner=args.tie_winner)

    delay = 0.0 if (args.fast or not args.auto) else args.delay
    renderer = TerminalRenderer(delay=delay)
    gc.on_event(renderer.make_event_callback(gc))

    renderer.print_header("🃏 Three-Cards")
    if args.auto:
        run_auto(gc, args.rounds)
    else:
        run_interactive(gc, renderer)


if __name__ == "__main__":
    main()
