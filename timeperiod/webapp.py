"""HTTP interface for parsing and formatting durations."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

from .durations import DEFAULT_UNITS, ParseError, ParseMode
from .period import TimePeriod


def _period_payload(period: TimePeriod, text: Optional[str] = None) -> Dict[str, Any]:
    return {
        "text": text,
        "total": period.duration,
        "days": period.days,
        "hours": period.hours,
        "minutes": period.minutes,
        "seconds": period.seconds,
        "display": period.to_string(),
        "sql": period.as_sql_interval(),
    }


def create_app(strict: bool = False, logger: Optional[logging.Logger] = None) -> FastAPI:
    app = FastAPI(title="timeperiod Web API")
    app.state.strict = strict
    app.state.logger = logger or logging.getLogger(__name__)

    @app.get("/api/parse")
    async def api_parse(text: str, strict: Optional[bool] = None) -> JSONResponse:
        use_strict = app.state.strict if strict is None else strict
        mode = ParseMode.STRICT if use_strict else ParseMode.LENIENT
        try:
            period = TimePeriod.from_string(text, mode=mode)
        except ParseError as exc:
            app.state.logger.warning(f"[parse] rejected {text!r}: {exc}")
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        app.state.logger.info(f"[parse] {text!r} -> {period.duration}s")
        return JSONResponse(_period_payload(period, text))

    @app.get("/api/format/{total}")
    async def api_format(total: int) -> JSONResponse:
        try:
            period = TimePeriod.from_seconds(total)
        except ParseError as exc:
            app.state.logger.warning(f"[format] rejected {total}: {exc}")
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        app.state.logger.info(f"[format] {total}s -> {period}")
        return JSONResponse(_period_payload(period))

    @app.get("/api/units")
    async def api_units() -> JSONResponse:
        return JSONResponse(dict(DEFAULT_UNITS))

    return app
