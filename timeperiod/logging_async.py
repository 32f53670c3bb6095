import asyncio, logging, sys
from typing import Optional, TextIO

LOG_FORMAT = "[%(asctime)s] %(levelname)s> %(message)s"
LOG_DATEFMT = "%H:%M:%S"


class AsyncQueueHandler(logging.Handler):
    """Handler that hands formatted records to an asyncio queue without blocking."""

    def __init__(self, queue: asyncio.Queue):
        super().__init__()
        self.queue = queue

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.queue.put_nowait((record.levelno, record.name, self.format(record)))
        except Exception:
            self.handleError(record)


async def log_worker(
    queue: asyncio.Queue,
    stop_event: asyncio.Event,
    level=logging.INFO,
    stream: Optional[TextIO] = None,
) -> None:
    """Drain ``queue`` to ``stream`` (stdout by default) until ``stop_event`` is set."""
    base_handler = logging.StreamHandler(stream or sys.stdout)
    base_handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATEFMT))
    base_handler.setLevel(level)

    while not stop_event.is_set() or not queue.empty():
        try:
            lvl, name, msg = await asyncio.wait_for(queue.get(), timeout=0.5)
        except asyncio.TimeoutError:
            continue
        try:
            if lvl >= base_handler.level:
                record = logging.LogRecord(name, lvl, "", 0, msg, None, None)
                base_handler.emit(record)
        except Exception as e:
            sys.stderr.write(f"[log_worker error] {e}\n")
        finally:
            queue.task_done()

    base_handler.flush()


def get_logger(queue: asyncio.Queue, name: str = "timeperiod") -> logging.Logger:
    logger = logging.getLogger(name)
    existing = [h for h in logger.handlers if isinstance(h, AsyncQueueHandler)]
    if existing:
        # a new event loop brings a new queue
        existing[0].queue = queue
    else:
        handler = AsyncQueueHandler(queue)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger
