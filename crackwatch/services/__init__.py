"""Service layer: wire protocol, normalization and the search entry point."""

from .codec import (
    ClassifiedFrame,
    FrameKind,
    classify_frame,
    decode_result,
    encode_query,
)
from .commands import SearchCommand, parse_command
from .config import ConfigurationService, ValidationResult
from .dates import is_unknown_date, parse_date_field
from .drm import DRM_NAME_MAPPING, DRM_UNKNOWN, DRMNormalizer, normalize_drm_names
from .errors import (
    AppError,
    ErrorCategory,
    ErrorHandlingService,
    ErrorSeverity,
    NetworkError,
    ProtocolError,
    RemoteRejectionError,
    UserFriendlyError,
    ValidationError,
    get_error_service,
    handle_error,
)
from .formatter import format_results
from .search import CrackwatchSearchService, search
from .session import ConnectionSession, SessionState

__all__ = [
    "AppError",
    "ClassifiedFrame",
    "ConfigurationService",
    "ConnectionSession",
    "CrackwatchSearchService",
    "DRMNormalizer",
    "DRM_NAME_MAPPING",
    "DRM_UNKNOWN",
    "ErrorCategory",
    "ErrorHandlingService",
    "ErrorSeverity",
    "FrameKind",
    "NetworkError",
    "ProtocolError",
    "RemoteRejectionError",
    "SearchCommand",
    "SessionState",
    "UserFriendlyError",
    "ValidationError",
    "ValidationResult",
    "classify_frame",
    "decode_result",
    "encode_query",
    "format_results",
    "get_error_service",
    "handle_error",
    "is_unknown_date",
    "normalize_drm_names",
    "parse_command",
    "parse_date_field",
    "search",
]
