from .canonical import canonical_bytes, canonical_text, format_duration
from .command import (
    Command,
    Identifiers,
    InputExclusion,
    InputSpec,
    InputType,
    format_input_type,
)
from .defaults import DEFAULT_TOOL_NAME, fill_default_field_values, normalize
from .execution import (
    Digest,
    ExecutionEngine,
    ExecutionOptions,
    Metadata,
    Result,
    ResultStatus,
    default_execution_options,
    format_result_status,
)
from .fingerprint import fingerprint, stable_id
from .runner import run_command
from .validation import (
    CommandValidationError,
    MissingArgsError,
    MissingExecRootError,
    MissingIdentifiersError,
    MissingInputSpecError,
    validate,
    validation_error,
)

__all__ = [
    "Command",
    "CommandValidationError",
    "DEFAULT_TOOL_NAME",
    "Digest",
    "ExecutionEngine",
    "ExecutionOptions",
    "Identifiers",
    "InputExclusion",
    "InputSpec",
    "InputType",
    "Metadata",
    "MissingArgsError",
    "MissingExecRootError",
    "MissingIdentifiersError",
    "MissingInputSpecError",
    "Result",
    "ResultStatus",
    "canonical_bytes",
    "canonical_text",
    "default_execution_options",
    "fill_default_field_values",
    "fingerprint",
    "format_duration",
    "format_input_type",
    "format_result_status",
    "normalize",
    "run_command",
    "stable_id",
    "validate",
    "validation_error",
]
