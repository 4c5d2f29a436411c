"""chartmcp: dispatch chart and map generation tool calls.

A tool call is resolved to a chart type, validated against that type's
schema, routed to a generation strategy (remote Chart API, Map API, or
local rendering with fallback and upload), and returned as a uniform
response envelope.
"""

from .config import ServerConfig
from .dispatcher import Dispatcher, call_tool
from .errors import (
    CallerError,
    ChartError,
    ConfigurationError,
    GenerationError,
    UploadError,
    ValidateError,
)
from .models import ChartRequest, ChartType, ResponseEnvelope, StrategyKind

__version__ = "0.1.0"

__all__ = [
    "CallerError",
    "ChartError",
    "ChartRequest",
    "ChartType",
    "ConfigurationError",
    "Dispatcher",
    "GenerationError",
    "ResponseEnvelope",
    "ServerConfig",
    "StrategyKind",
    "UploadError",
    "ValidateError",
    "call_tool",
]
