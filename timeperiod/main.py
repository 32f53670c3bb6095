import asyncio
import sys
from typing import Dict, List, Mapping, Optional

import uvicorn

from .cli import parse_args
from .durations import DEFAULT_UNITS, ParseError, ParseMode
from .logging_async import get_logger, log_worker
from .period import TimePeriod
from .webapp import create_app


def describe(period: TimePeriod) -> Dict[str, int]:
    return {
        "total": period.duration,
        "days": period.days,
        "hours": period.hours,
        "minutes": period.minutes,
        "seconds": period.seconds,
    }


def group_units(units: Mapping[str, int] = DEFAULT_UNITS) -> Dict[int, List[str]]:
    grouped: Dict[int, List[str]] = {}
    for literal, multiplier in units.items():
        grouped.setdefault(multiplier, []).append(literal)
    return dict(sorted(grouped.items()))


async def serve_async(params):
    host = getattr(params, "host", "127.0.0.1")
    port = getattr(params, "port", 8000)

    log_queue: asyncio.Queue = asyncio.Queue()
    stop_event = asyncio.Event()
    log_task = asyncio.create_task(log_worker(log_queue, stop_event))
    logger = get_logger(log_queue)

    app = create_app(strict=getattr(params, "strict", False), logger=logger)
    config = uvicorn.Config(app, host=host, port=port, loop="asyncio", log_level="info")
    server = uvicorn.Server(config)

    logger.info(f"[serve] listening on http://{host}:{port}")
    try:
        await server.serve()
    finally:
        stop_event.set()
        await log_queue.join()
        await log_task


def main(argv: Optional[List[str]] = None):
    params = parse_args(argv or sys.argv[1:])
    try:
        if params.command == "parse":
            mode = ParseMode.STRICT if params.strict else ParseMode.LENIENT
            period = TimePeriod.from_string(" ".join(params.text), mode=mode)
            if params.sql:
                print(period.as_sql_interval())
            elif params.components:
                for key, value in describe(period).items():
                    print(f"{key:>8}: {value}")
            else:
                print(period)
        elif params.command == "format":
            period = TimePeriod.from_seconds(params.total)
            print(period.as_sql_interval() if params.sql else period)
        elif params.command == "units":
            for multiplier, literals in group_units().items():
                print(f"{multiplier:>10}: {', '.join(literals)}")
        elif params.command == "serve":
            try:
                asyncio.run(serve_async(params))
            except KeyboardInterrupt:
                print("\n[interrupt] server exiting…")
        else:
            raise ValueError(f"Unknown command: {params.command}")
    except ParseError as exc:
        print(f"[error] {exc}")
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover - exercised via CLI invocation
    main(sys.argv[1:])
