"""Public façade for the app.core package.

This module exposes logging helpers, the error taxonomy and the explicit
result type that are safe to import from other packages. Callers should
import these cross-cutting concerns from this façade instead of the internal
submodules.
"""

from .errors import (
    AppError,
    ConfigError,
    InternalError,
    NotFound,
    Unauthorized,
    UpstreamError,
    ValidationError,
)
from .logging_config import configure_logging
from .logging_utils import (
    log_error,
    log_exception,
    log_info,
    log_step,
    log_success,
    log_warning,
)
from .result import Err, Ok, Result

__all__ = [
    "configure_logging",
    "log_info",
    "log_step",
    "log_success",
    "log_warning",
    "log_error",
    "log_exception",
    "AppError",
    "ConfigError",
    "ValidationError",
    "Unauthorized",
    "NotFound",
    "UpstreamError",
    "InternalError",
    "Ok",
    "Err",
    "Result",
]
