"""FastAPI decision service and websocket turn streaming."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect

from . import config
from .controller import DecisionError
from .protocol import ProtocolError, action_to_payload, turn_from_payload
from .settings import EngineSettings
from .strategies.registry import StrategyRegistry, default_registry
from .strategies.types import Strategy, StrategyInitContext, TurnDecision

logger = logging.getLogger(__name__)


class DecisionService:
    def __init__(self, settings: EngineSettings | None = None, registry: StrategyRegistry | None = None) -> None:
        self.settings = settings or EngineSettings.from_env()
        self.registry = registry or default_registry()
        self.default_strategy = config.DEFAULT_STRATEGY

    def describe(self) -> dict:
        return {
            "settings": self.settings.as_dict(),
            "defaultStrategy": self.default_strategy,
            "strategyModules": list(config.STRATEGY_MODULES),
        }

    def strategy(self, name: str | None) -> Strategy:
        key = (name or self.default_strategy).strip().lower()
        return self.registry.create(key, StrategyInitContext(strategy_name=key, settings=self.settings))

    def decide(self, payload: dict) -> dict:
        state = turn_from_payload(payload)
        strategy_name = payload.get("strategy")
        if strategy_name is not None and not isinstance(strategy_name, str):
            raise ProtocolError("Field 'strategy' must be a string")
        decision: TurnDecision = self.strategy(strategy_name).decide(state)
        return {
            "action": action_to_payload(decision.action),
            "reason": decision.reason,
            "targetId": decision.target_id,
        }


app = FastAPI(title="Accountant Decision Engine")
state = DecisionService()


@app.get("/api/config")
async def engine_config() -> dict:
    return state.describe()


@app.get("/api/strategies")
async def strategies() -> dict:
    return {"strategies": list(state.registry.names), "default": state.default_strategy}


@app.post("/api/decide")
async def decide(payload: dict) -> dict:
    try:
        return state.decide(payload)
    except ProtocolError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except ValueError as exc:
        # Unknown strategy names surface from the registry as ValueError.
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except DecisionError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc


@app.websocket("/ws")
async def websocket_handler(websocket: WebSocket) -> None:
    await websocket.accept()
    try:
        while True:
            msg = await websocket.receive_json()
            if not isinstance(msg, dict):
                await websocket.send_json({"type": "error", "detail": "Messages must be objects"})
                continue
            if msg.get("type") == "ping":
                await websocket.send_json({"type": "pong", "ts": msg.get("ts")})
                continue
            if msg.get("type") != "turn":
                await websocket.send_json({"type": "error", "detail": f"Unknown message type {msg.get('type')!r}"})
                continue
            try:
                result = state.decide(msg)
            except (ValueError, DecisionError) as exc:
                logger.warning("Rejected websocket turn: %s", exc)
                await websocket.send_json({"type": "error", "detail": str(exc)})
                continue
            await websocket.send_json({"type": "decision", **result})
    except WebSocketDisconnect:
        pass
