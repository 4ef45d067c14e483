import asyncio
import datetime
import os
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from pydantic import BaseModel, Field

from . import engine_adapter as _adapter
from .config import ROOT_DIR, Settings, load_settings
from .engine_adapter import create_engine
from .manifest import build_manifest


ENGINE_MANIFEST = os.path.join(str(ROOT_DIR), 'engine_manifest.json')


class PlacementHub:
    """One board, one writer: every mutation runs under ``self.lock``.

    Read endpoints are coroutines too, so they run on the event loop between
    writes and never see a half-applied drop.
    """

    def __init__(self, settings: Optional[Settings] = None, **engine_kwargs):
        self.created_at = datetime.datetime.now(datetime.timezone.utc)
        self.engine = create_engine(settings, **engine_kwargs)
        self.lock = asyncio.Lock()

    def state(self) -> Dict[str, Any]:
        return self.engine.serialize_state()

    async def place(self, seat: Optional[str], square: str, kind: str) -> Dict[str, Any]:
        async with self.lock:
            res = self.engine.apply_drop(seat, square, kind)
            res['state'] = self.state()
            return res

    async def reset(self) -> Dict[str, Any]:
        async with self.lock:
            self.engine.reset()
            return {'state': self.state()}

    async def start(self) -> Dict[str, Any]:
        async with self.lock:
            res = self.engine.start_standard()
            res['state'] = self.state()
            return res

    async def move(self, seat: str, uci: str) -> Dict[str, Any]:
        async with self.lock:
            res = self.engine.apply_move(seat, uci)
            res['state'] = self.state()
            return res


class DropPayload(BaseModel):
    square: str = Field(..., description="Target square, e.g. 'e4'.", max_length=8)
    kind: str = Field(..., description="Piece kind: pawn/knight/bishop/rook/queen or P/N/B/R/Q.", max_length=16)
    seat: Optional[str] = Field(
        default=None,
        description="Requesting color. Informational only: the side to move is forced.",
        max_length=8,
    )


class MovePayload(BaseModel):
    seat: str = Field(..., max_length=8)
    uci: str = Field(..., description="Move in UCI form, e.g. 'e2e4'.", max_length=8)


def create_app(settings: Optional[Settings] = None, **engine_kwargs) -> FastAPI:
    app = FastAPI(title="dropchess")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    hub = PlacementHub(settings or load_settings(), **engine_kwargs)
    app.state.hub = hub

    @app.get('/version')
    async def version_info():
        return JSONResponse({
            "ok": True,
            "engine_version": _adapter.ENGINE_VERSION,
            "rules_mode": hub.engine.orchestrator.rules_mode,
            "started_at": hub.created_at.isoformat(),
        })

    @app.get('/engine_manifest.json')
    async def engine_manifest():
        if os.path.exists(ENGINE_MANIFEST):
            return FileResponse(ENGINE_MANIFEST, media_type='application/json')
        return JSONResponse(build_manifest())

    @app.get('/state')
    async def state():
        return JSONResponse({'ok': True, 'state': hub.state()})

    @app.get('/fen')
    async def fen():
        return JSONResponse({'ok': True, 'fen': hub.engine.current_fen()})

    @app.get('/requirement')
    async def requirement():
        orch = hub.engine.orchestrator
        if orch.phase.value != 'PLACEMENT':
            return JSONResponse({'ok': False, 'error': 'Placement phase is over'}, status_code=409)
        return JSONResponse({'ok': True, **orch.current_requirement().to_dict(), 'move_count': orch.move_count})

    @app.get('/suggest')
    async def suggestion():
        orch = hub.engine.orchestrator
        if orch.phase.value != 'PLACEMENT':
            return JSONResponse({'ok': False, 'error': 'Placement phase is over'}, status_code=409)
        return JSONResponse({'ok': True, 'kind': orch.suggest().name.lower()})

    @app.get('/legal')
    async def legal(kind: Optional[str] = Query(None, description="Piece kind; defaults to the suggested one")):
        orch = hub.engine.orchestrator
        if orch.phase.value != 'PLACEMENT':
            return JSONResponse({'ok': True, 'kind': kind, 'squares': []})
        role = kind or orch.suggest().name.lower()
        try:
            squares = hub.engine.legal_drops(role)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return JSONResponse({'ok': True, 'kind': role, 'squares': squares})

    @app.get('/legal-moves')
    async def legal_moves():
        return JSONResponse({'ok': True, 'moves': hub.engine.legal_moves_for_active()})

    @app.post('/place')
    async def place(payload: DropPayload):
        try:
            res = await hub.place(payload.seat, payload.square, payload.kind)
        except Exception as e:
            return JSONResponse({'ok': False, 'error': str(e)}, status_code=500)
        return JSONResponse(res, status_code=200 if res.get('ok') else 400)

    @app.post('/reset')
    async def reset():
        try:
            res = await hub.reset()
            return JSONResponse({'ok': True, **res})
        except Exception as e:
            return JSONResponse({'ok': False, 'error': str(e)}, status_code=500)

    @app.post('/start')
    async def start():
        res = await hub.start()
        return JSONResponse(res, status_code=200 if res.get('ok') else 409)

    @app.post('/move')
    async def move(payload: MovePayload):
        res = await hub.move(payload.seat, payload.uci)
        return JSONResponse(res, status_code=200 if res.get('ok') else 400)

    return app


def main() -> None:
    import argparse

    import uvicorn

    parser = argparse.ArgumentParser(description="Serve the drop-phase engine over HTTP")
    parser.add_argument('--host', default=os.environ.get('DROPCHESS_HOST', '127.0.0.1'))
    parser.add_argument('--port', type=int, default=int(os.environ.get('DROPCHESS_PORT', '8000')))
    parser.add_argument('--rules', default=None, help="full or permissive")
    parser.add_argument('--seed', type=int, default=None)
    args = parser.parse_args()
    settings = load_settings(args.rules, seed=args.seed)
    print(f"[Server] rules={settings.rules_mode} seed={settings.seed} on http://{args.host}:{args.port}")
    uvicorn.run(create_app(settings), host=args.host, port=args.port)


if __name__ == '__main__':
    main()
