from .digest import EMPTY_DIGEST, Digest
from .engine import ExecutionEngine
from .types import (
    LOCAL_ERROR_EXIT_CODE,
    ExecutionOptions,
    Metadata,
    Result,
    ResultStatus,
    default_execution_options,
    format_result_status,
)

__all__ = [
    "Digest",
    "EMPTY_DIGEST",
    "ExecutionEngine",
    "ExecutionOptions",
    "LOCAL_ERROR_EXIT_CODE",
    "Metadata",
    "Result",
    "ResultStatus",
    "default_execution_options",
    "format_result_status",
]
