from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from typing import Dict, Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from fleet import (
    Control,
    DispatchSettings,
    DuplicateElevatorError,
    EmptyFleetError,
    Simulation,
    UnknownElevatorError,
)

logger = logging.getLogger(__name__)


class ElevatorRegistration(BaseModel):
    elevator_id: int
    floor: int


class FloorCall(BaseModel):
    floor: int


class AlgorithmSelection(BaseModel):
    name: str
    options: Dict[str, object] = {}


class SimulationManager:
    """Serializes every fleet mutation so pickups and steps never interleave."""

    def __init__(self, settings: Optional[DispatchSettings] = None) -> None:
        self.settings = settings or DispatchSettings()
        self.simulation = Simulation(Control(self.settings))
        self.clients: Set[WebSocket] = set()
        self._task: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()

    async def start(self) -> None:
        if self.settings.auto_step and self._task is None:
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    async def _run(self) -> None:
        while True:
            async with self._lock:
                moved = self.simulation.control.busy and self.simulation.step()
                payload = self.current_state()
            if moved:
                await self.broadcast(payload)
            await asyncio.sleep(self.settings.tick_interval_seconds)

    async def broadcast(self, payload: dict) -> None:
        message = json.dumps(payload)
        disconnected: Set[WebSocket] = set()
        for client in set(self.clients):
            try:
                await client.send_text(message)
            except (WebSocketDisconnect, RuntimeError) as exc:
                logger.info("dropping stream client: %r", exc)
                disconnected.add(client)
        for client in disconnected:
            await self.unregister(client)

    async def register(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.clients.add(websocket)
        logger.info("stream client connected (%d open)", len(self.clients))
        await websocket.send_text(json.dumps(self.current_state()))

    async def unregister(self, websocket: WebSocket) -> None:
        if websocket in self.clients:
            self.clients.remove(websocket)
        with contextlib.suppress(Exception):
            await websocket.close()

    def current_state(self) -> dict:
        return self.simulation.snapshot()

    async def set_scheduler(self, name: str, options: Dict[str, object]) -> dict:
        async with self._lock:
            self.simulation.control.set_scheduler(name, **options)
            state = self.current_state()
        await self.broadcast(state)
        return state

    async def add_elevator(self, elevator_id: int, floor: int) -> dict:
        async with self._lock:
            self.simulation.add_elevator(elevator_id, floor)
            state = self.current_state()
        await self.broadcast(state)
        return state

    async def request_floor(self, elevator_id: int, floor: int) -> dict:
        async with self._lock:
            self.simulation.request_floor(elevator_id, floor)
            state = self.current_state()
        await self.broadcast(state)
        return state

    async def pickup(self, floor: int) -> dict:
        async with self._lock:
            elevator_id = self.simulation.pickup(floor)
            state = self.current_state()
        await self.broadcast(state)
        return dict(state, elevator_id=elevator_id, floor=floor)

    async def step(self) -> dict:
        async with self._lock:
            self.simulation.step()
            report = self.simulation.last_report
            state = self.current_state()
        await self.broadcast(state)
        return dict(state, **report.as_dict())


def create_app(manager: SimulationManager) -> FastAPI:
    app = FastAPI(title="Fleet Dispatch API")
    app.state.manager = manager
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    async def on_startup() -> None:
        await manager.start()

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        await manager.stop()

    @app.get("/state")
    async def get_state() -> dict:
        return manager.current_state()

    @app.post("/algorithm")
    async def set_algorithm(selection: AlgorithmSelection) -> dict:
        try:
            return await manager.set_scheduler(selection.name, selection.options)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))

    @app.post("/elevators")
    async def add_elevator(registration: ElevatorRegistration) -> dict:
        try:
            return await manager.add_elevator(registration.elevator_id, registration.floor)
        except DuplicateElevatorError as exc:
            raise HTTPException(status_code=409, detail=str(exc))

    @app.post("/elevators/{elevator_id}/requests")
    async def request_floor(elevator_id: int, call: FloorCall) -> dict:
        try:
            return await manager.request_floor(elevator_id, call.floor)
        except UnknownElevatorError as exc:
            raise HTTPException(status_code=404, detail=str(exc))

    @app.post("/pickups")
    async def pickup(call: FloorCall) -> dict:
        try:
            return await manager.pickup(call.floor)
        except EmptyFleetError as exc:
            raise HTTPException(status_code=409, detail=str(exc))

    @app.post("/step")
    async def step() -> dict:
        return await manager.step()

    @app.websocket("/ws/stream")
    async def websocket_endpoint(websocket: WebSocket) -> None:
        await manager.register(websocket)
        try:
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            await manager.unregister(websocket)

    return app


manager = SimulationManager()
app = create_app(manager)


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=False)
