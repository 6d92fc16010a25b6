"""HTTP API for shots, statistics and reference data."""

from contextlib import asynccontextmanager
from datetime import date
from typing import Any, List, Optional

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..config import get_settings
from ..db import close_engine, create_tables, get_session_factory
from ..models.enums import ComparisonKind, ShotType
from ..models.shots import ShotFilters
from ..nba_logging import clear_trace_id, get_logger, set_trace_id
from ..services.shot_service import ShotService
from ..store.shot_store import ShotStore
from ..transformers.aggregate import compare_summaries

logger = get_logger(__name__)


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, dict):
        return {k: _dump(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_dump(v) for v in value]
    return value


def ok(data: Any = None, message: Optional[str] = None) -> JSONResponse:
    """Success envelope: ``{success: true, data?, message?}``."""
    body: dict = {"success": True}
    if data is not None:
        body["data"] = _dump(data)
    if message is not None:
        body["message"] = message
    return JSONResponse(content=body)


def fail(error: str, status_code: int = 500, message: Optional[str] = None) -> JSONResponse:
    """Failure envelope: ``{success: false, error, message?}``."""
    body: dict = {"success": False, "error": error}
    if message is not None:
        body["message"] = message
    return JSONResponse(status_code=status_code, content=body)


def _filters(
    shot_types: Optional[List[ShotType]],
    opponent: Optional[str],
    start_date: Optional[date],
    end_date: Optional[date],
) -> ShotFilters:
    return ShotFilters(
        shot_types=shot_types or None,
        opponent=opponent or None,
        date_range_start=start_date,
        date_range_end=end_date,
    )


def create_app(service: Optional[ShotService] = None) -> FastAPI:
    """Build the API application.

    Args:
        service: Service to serve from; when omitted one is built on the
            configured database at startup and the engine is closed on shutdown.
    """
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if service is None:
            await create_tables()
            app.state.service = ShotService(ShotStore(get_session_factory()))
            try:
                yield
            finally:
                await close_engine()
        else:
            app.state.service = service
            yield

    app = FastAPI(title="NBA Shot Chart API", version=__version__, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def trace_requests(request: Request, call_next):
        trace_id = set_trace_id(request.headers.get("x-trace-id"))
        try:
            response = await call_next(request)
            response.headers["x-trace-id"] = trace_id
            logger.info(
                "Request handled",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
            )
            return response
        finally:
            clear_trace_id()

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        logger.warning("Invalid request parameters", path=request.url.path, errors=exc.errors())
        return fail("Invalid request parameters", status_code=400)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        logger.info("HTTP error", path=request.url.path, status_code=exc.status_code)
        response = fail(str(exc.detail), status_code=exc.status_code)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    def _service(request: Request) -> ShotService:
        if service is not None:
            return service
        return request.app.state.service

    @app.get("/")
    async def status():
        return {"status": "ok", "message": "NBA Shot Chart API is running", "version": __version__}

    @app.get("/api/shots/player/{player_id}/season/{season}")
    async def get_player_shots(
        request: Request,
        player_id: str,
        season: str,
        shot_types: Optional[List[ShotType]] = Query(None, alias="shotTypes"),
        opponent: Optional[str] = None,
        start_date: Optional[date] = Query(None, alias="startDate"),
        end_date: Optional[date] = Query(None, alias="endDate"),
    ):
        try:
            filters = _filters(shot_types, opponent, start_date, end_date)
        except ValidationError:
            return fail("Invalid request parameters", status_code=400)

        try:
            shots = await _service(request).get_player_shots(player_id, season, filters)
        except Exception as e:
            logger.error("Error fetching player shots", player_id=player_id, season=season, error=str(e))
            return fail("Failed to fetch shot data")
        return ok(shots)

    @app.get("/api/stats/player/{player_id}/season/{season}")
    async def get_player_shot_stats(
        request: Request,
        player_id: str,
        season: str,
        shot_types: Optional[List[ShotType]] = Query(None, alias="shotTypes"),
        opponent: Optional[str] = None,
        start_date: Optional[date] = Query(None, alias="startDate"),
        end_date: Optional[date] = Query(None, alias="endDate"),
    ):
        try:
            filters = _filters(shot_types, opponent, start_date, end_date)
        except ValidationError:
            return fail("Invalid request parameters", status_code=400)

        try:
            stats = await _service(request).get_player_shot_stats(player_id, season, filters)
        except Exception as e:
            logger.error("Error fetching player shot stats", player_id=player_id, season=season, error=str(e))
            return fail("Failed to fetch shot statistics")
        return ok(stats)

    @app.get("/api/compare/season/{season}")
    async def compare_players(
        request: Request,
        season: str,
        player_ids: List[str] = Query(..., alias="playerIds"),
        kind: ComparisonKind = ComparisonKind.OVERALL,
        shot_types: Optional[List[ShotType]] = Query(None, alias="shotTypes"),
        opponent: Optional[str] = None,
        start_date: Optional[date] = Query(None, alias="startDate"),
        end_date: Optional[date] = Query(None, alias="endDate"),
    ):
        try:
            filters = _filters(shot_types, opponent, start_date, end_date)
            outcomes = await _service(request).compare_players(player_ids, season, filters)
        except (ValidationError, ValueError) as e:
            return fail("Invalid request parameters", status_code=400, message=str(e))
        except Exception as e:
            logger.error("Error comparing players", season=season, error=str(e))
            return fail("Failed to compare players")

        summaries = {pid: o.stats for pid, o in outcomes.items() if o.stats is not None}
        return ok({"players": outcomes, "rows": compare_summaries(summaries, kind)})

    @app.get("/api/players")
    async def get_players(request: Request):
        try:
            players = await _service(request).get_players()
        except Exception as e:
            logger.error("Error fetching players", error=str(e))
            return fail("Failed to fetch players")
        return ok(players)

    @app.get("/api/teams")
    async def get_teams(request: Request):
        try:
            teams = await _service(request).get_teams()
        except Exception as e:
            logger.error("Error fetching teams", error=str(e))
            return fail("Failed to fetch teams")
        return ok(teams)

    @app.get("/api/seasons")
    async def get_seasons(request: Request):
        try:
            seasons = await _service(request).get_seasons()
        except Exception as e:
            logger.error("Error fetching seasons", error=str(e))
            return fail("Failed to fetch seasons")
        return ok(seasons)

    return app
