"""Web 后端服务 - 通过 HTTP 与 WebSocket 驱动一局三张牌对局"""

import asyncio
import json
import logging
import os
import random
from typing import Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect

from src.engine.card import Card, Rank, RANK_DISPLAY
from src.engine.hand_type import HandRank
from src.game.game_state import GameState
from src.game.controller import GameController

logger = logging.getLogger(__name__)

CARD_IMAGE_BASE = "https://deckofcardsapi.com/static/img"


# ============================================================
#  序列化工具
# ============================================================

def card_image_url(card: Card) -> str:
    """牌面图片地址：10 用单字符 0 表示，花色取首字母"""
    code = "0" if card.rank == Rank.TEN else RANK_DISPLAY[card.rank]
    return f"{CARD_IMAGE_BASE}/{code}{card.suit.value[0]}.png"


def card_to_dict(c: Card) -> dict:
    """将 Card 序列化为前端可用的 dict"""
    return {
        "value": RANK_DISPLAY[c.rank],
        "suit": c.suit.value,
        "display": c.display,
        "image": card_image_url(c),
    }


def rank_to_dict(r: Optional[HandRank]) -> Optional[dict]:
    if r is None:
        return None
    return {"category": r.category.label, "tiebreak": r.tiebreak}


def state_to_dict(s: GameState) -> dict:
    """将 GameState 序列化（不暴露牌堆顺序）"""
    return {
        "phase": s.phase.value,
        "current_player": s.current_player,
        "draw_count": s.draw_count,
        "deck_size": len(s.deck),
        "hand1": [card_to_dict(c) for c in s.hand1],
        "hand2": [card_to_dict(c) for c in s.hand2],
        "rank1": rank_to_dict(s.rank_of(1)),
        "rank2": rank_to_dict(s.rank_of(2)),
        "game_over": s.game_over,
        "winner": s.winner,
    }


# ============================================================
#  会话
# ============================================================

def _env_int(name: str, default: Optional[int] = None) -> Optional[int]:
    """读取整数环境变量，非法值给出明确的报错"""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def create_controller() -> GameController:
    """按环境变量创建对局控制器"""
    seed = _env_int("THREE_CARDS_SEED")
    tie_winner = _env_int("THREE_CARDS_TIE_WINNER", 2)
    if tie_winner not in (1, 2):
        raise ValueError(f"THREE_CARDS_TIE_WINNER must be 1 or 2, got {tie_winner}")
    rng = random.Random(seed) if seed is not None else random.Random()
    return GameController(rng=rng, tie_winner=tie_winner)


app = FastAPI(title="Three-Cards")

# 单一对局会话
controller = create_controller()
_lock = asyncio.Lock()

# WebSocket 连接池
connections: Set[WebSocket] = set()


async def broadcast(msg: dict) -> None:
    """向所有连接的客户端广播消息"""
    data = json.dumps(msg, ensure_ascii=False)
    dead = set()
    for ws in connections:
        try:
            await ws.send_text(data)
        except Exception:
            dead.add(ws)
    connections.difference_update(dead)


async def do_draw() -> dict:
    """摸一张牌；失败时返回 error 字段，状态不变"""
    async with _lock:
        result = controller.draw()
        msg = {"type": "state", "state": state_to_dict(controller.state)}
        if result.ok:
            msg["card"] = card_to_dict(result.card)
        else:
            msg["error"] = str(result.error)
    await broadcast(msg)
    return msg


async def do_reset() -> dict:
    async with _lock:
        controller.reset()
        msg = {"type": "state", "state": state_to_dict(controller.state)}
    await broadcast(msg)
    return msg


# ============================================================
#  HTTP 接口
# ============================================================

@app.get("/api/state")
async def get_state():
    """当前对局状态"""
    return state_to_dict(controller.state)


@app.post("/api/draw")
async def post_draw():
    """当前玩家摸牌；牌堆空或已结束时返回 409"""
    msg = await do_draw()
    if "error" in msg:
        raise HTTPException(status_code=409, detail=msg["error"])
    return msg


@app.post("/api/reset")
async def post_reset():
    return await do_reset()


async def send_error(ws: WebSocket, error: str) -> None:
    """只回复给发送方的错误消息"""
    await ws.send_text(json.dumps({"type": "error", "error": error}))


@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    """WebSocket 端点：接收 draw / reset / state 指令"""
    await ws.accept()
    connections.add(ws)
    await ws.send_text(json.dumps({"type": "state", "state": state_to_dict(controller.state)}))
    try:
        while True:
            data = await ws.receive_text()
            try:
                msg = json.loads(data)
            except json.JSONDecodeError:
                msg = None
            if not isinstance(msg, dict):
                logger.warning("malformed websocket message: %r", data)
                await send_error(ws, "malformed message: expected a JSON object")
                continue

            action = msg.get("action")
            if action == "draw":
                await do_draw()
            elif action == "reset":
                await do_reset()
            elif action == "state":
                await ws.send_text(json.dumps({"type": "state", "state": state_to_dict(controller.state)}))
            else:
                logger.warning("unknown websocket action: %r", action)
                await send_error(ws, f"unknown action: {action}")
    except (WebSocketDisconnect, RuntimeError):
        pass
    finally:
        connections.discard(ws)
