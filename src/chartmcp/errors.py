"""Exception hierarchy for chart dispatch.

Every failure a tool call can hit is one of these.  The dispatcher
catches them at a single boundary and turns them into an error
envelope, so nothing here ever reaches the calling agent as a raw
exception.

``ChartError`` must not derive from ``ValueError``: pydantic converts
``ValueError`` / ``AssertionError`` into validation errors, while a
``ValidateError`` raised inside a schema validator has to propagate out
of ``model_validate`` untouched.
"""

from __future__ import annotations


class ChartError(Exception):
    """Base class for every chart dispatch failure."""


class CallerError(ChartError):
    """Unknown tool, unsupported chart type, or a missing ``type``."""


class ValidateError(ChartError):
    """Arguments are well-typed but semantically invalid.

    The message is shown to the caller verbatim.
    """


class GenerationError(ChartError):
    """An upstream service failed or returned ``success: false``."""


class UploadError(GenerationError):
    """The upload service rejected the image or returned no URL."""


class ConfigurationError(ChartError):
    """Local rendering failed and no fallback service is configured."""
