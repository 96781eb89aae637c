"""FastAPI for the LRU Cache Visualizer."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

import logging
import os
import sys
from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel

# Ensure project root is on sys.path when executed from arbitrary CWD
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from lru_visualizer.modules.config import AppConfig, load_config
from lru_visualizer.modules.lru_cache import InvalidCapacity
from lru_visualizer.modules.session import CacheSession, InvalidInput, InvalidOperation
from lru_visualizer.modules.slots import build_slots, usage_label


logger = logging.getLogger(__name__)


class OperationRequest(BaseModel):
    operation: Literal["get", "put"]
    key: str
    value: Optional[str] = None


class ResetRequest(BaseModel):
    capacity: Optional[int] = None


class SlotOut(BaseModel):
    index: int
    key: Optional[str] = None
    value: Optional[str] = None
    occupied: bool
    is_lru: bool
    is_mru: bool


class LogEntryOut(BaseModel):
    number: int
    message: str
    kind: str


class StateOut(BaseModel):
    capacity: int
    size: int
    usage: str
    hits: int
    misses: int
    hit_ratio: float
    slots: List[SlotOut]
    log: List[LogEntryOut]


class OperationOut(BaseModel):
    operation: str
    key: str
    value: Optional[str] = None
    found: Optional[bool] = None
    evicted: Optional[str] = None
    highlight: Optional[int] = None
    message: str
    state: StateOut


def build_state(session: CacheSession) -> StateOut:
    state = session.state()
    slots = build_slots(state["snapshot"], state["capacity"])
    return StateOut(
        capacity=state["capacity"],
        size=state["size"],
        usage=usage_label(state["size"], state["capacity"]),
        hits=state["hits"],
        misses=state["misses"],
        hit_ratio=round(state["hit_ratio"], 3),
        slots=[SlotOut(**s._asdict()) for s in slots],
        log=[LogEntryOut(**e._asdict()) for e in state["log"]],
    )


def _session(request: Request) -> CacheSession:
    return request.app.state.session


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    config = config or load_config()
    logging.basicConfig(level=config.log_level)

    app = FastAPI(title="LRU Cache Visualizer API", version="0.1.0")
    app.state.session = CacheSession(config)

    @app.get("/")
    async def root() -> Dict[str, Any]:
        return {"status": "ok", "message": "LRU Cache Visualizer API"}

    @app.get("/state", response_model=StateOut)
    async def get_state(request: Request) -> StateOut:
        return build_state(_session(request))

    @app.post("/operations", response_model=OperationOut)
    async def run_operation(req: OperationRequest, request: Request) -> OperationOut:
        session = _session(request)
        try:
            result = session.execute(req.operation, req.key, req.value)
        except (InvalidInput, InvalidOperation) as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        return OperationOut(
            operation=result.operation,
            key=result.key,
            value=result.value,
            found=result.found,
            evicted=result.evicted,
            highlight=result.highlight,
            message=result.log_entry.message,
            state=build_state(session),
        )

    @app.post("/reset", response_model=StateOut)
    async def reset(req: ResetRequest, request: Request) -> StateOut:
        session = _session(request)
        try:
            session.reset(req.capacity)
        except InvalidCapacity as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        return build_state(session)

    return app


app = create_app()
