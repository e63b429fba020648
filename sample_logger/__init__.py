from sample_logger.logging import (
    JsonFormatter,
    LoggerConfig,
    StdoutHandler,
    bind_request_id,
    configure_logging,
    create_logger,
    reset_request_id,
)

__all__ = [
    "JsonFormatter",
    "LoggerConfig",
    "StdoutHandler",
    "bind_request_id",
    "configure_logging",
    "create_logger",
    "reset_request_id",
]
