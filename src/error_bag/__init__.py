"""error_bag library."""

from .bag import ErrorCollection
from .config import ErrorBagConfig, LogSection, load_config
from .exceptions import (
    ErrorBagError,
    ErrorBagErrorCodes,
    InvalidSelectorError,
    NotFoundError,
)
from .logger import configure_logging, new_logger
from .models import NO_SCOPE, FieldError
from .selector import (
    CandidateFilters,
    Selector,
    build_selector,
    compile_selector,
    parse_selector,
)

__all__ = [
    "CandidateFilters",
    "ErrorBagConfig",
    "ErrorBagError",
    "ErrorBagErrorCodes",
    "ErrorCollection",
    "FieldError",
    "InvalidSelectorError",
    "LogSection",
    "NO_SCOPE",
    "NotFoundError",
    "Selector",
    "build_selector",
    "compile_selector",
    "configure_logging",
    "load_config",
    "new_logger",
    "parse_selector",
]
