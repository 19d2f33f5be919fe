import logging
import sys
from pathlib import Path

from loguru import logger

from src.book_catalog.runtime.config.config_data import ConfigData, LoggingConfig
from src.book_catalog.runtime.context import get_config

PLAIN_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "[<cyan>{extra[request_id]}</cyan>] | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# Floor levels for chatty third-party loggers.
STDLIB_LEVELS = {
    "pymongo": logging.WARNING,
    "uvicorn": logging.INFO,
    "uvicorn.error": logging.INFO,
    "uvicorn.access": logging.CRITICAL,
}

# Stdlib levels that share a name with a Loguru level; others log by number.
_LOGURU_LEVELS = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARNING",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "CRITICAL",
}


class InterceptHandler(logging.Handler):
    """Forward stdlib records (uvicorn, pymongo) to Loguru under their logger name."""

    # log_requests writes one line per request
    dropped = frozenset({"uvicorn.access"})

    def emit(self, record: logging.LogRecord) -> None:
        if record.name in self.dropped:
            return

        level = _LOGURU_LEVELS.get(record.levelno, record.levelno)
        logger.bind(logger_name=record.name).opt(
            depth=2, exception=record.exc_info
        ).log(level, record.getMessage())


def _add_file_sink(cfg: LoggingConfig, debug_traces: bool) -> None:
    path = Path(cfg.file)
    path.parent.mkdir(parents=True, exist_ok=True)
    as_json = cfg.format == "json"
    logger.add(
        str(path),
        level=cfg.level,
        format="{message}" if as_json else PLAIN_FORMAT,
        serialize=as_json,
        rotation=f"{cfg.max_size_mb} MB",
        retention=cfg.backup_count,
        compression="zip",
        enqueue=True,
        backtrace=debug_traces,
        diagnose=debug_traces,
    )


def _route_stdlib_logging() -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in list(logging.root.manager.loggerDict):
        existing = logging.getLogger(name)
        existing.handlers = []
        existing.propagate = True

    for name, level in STDLIB_LEVELS.items():
        logging.getLogger(name).setLevel(level)


def configure_logging(config: ConfigData | None = None) -> None:
    """Install the console sink, the optional file sink and stdlib interception.

    Every call starts from a clean Loguru logger, so calling it again replaces
    the previous sinks.
    """
    settings = config or get_config()
    cfg = settings.logging
    environment = settings.app.environment
    debug_traces = environment != "production"

    logger.remove()
    logger.configure(
        extra={"request_id": "-"},
        patcher=lambda record: record["extra"].setdefault("request_id", "-"),
    )

    logger.add(
        sys.stderr,
        level=cfg.level,
        format=PLAIN_FORMAT,
        colorize=True,
        backtrace=debug_traces,
        diagnose=debug_traces,
    )
    if cfg.file:
        _add_file_sink(cfg, debug_traces)

    _route_stdlib_logging()

    logger.info(
        "Logging configured",
        app_level=cfg.level,
        app_format=cfg.format,
        app_file=cfg.file,
        environment=environment,
    )
