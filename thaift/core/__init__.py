"""
Core Module
Provides the exception hierarchy of the parser.

The parse-call orchestration lives in thaift.core.session.
"""

from .exceptions import (
    TokenizerError,
    DependencyError,
    AllocationFailure,
    EncodingConversionDefect,
    CollaboratorRejection,
    SegmentationError,
    ConfigurationError,
    SessionError
)

__all__ = [
    'TokenizerError',
    'DependencyError',
    'AllocationFailure',
    'EncodingConversionDefect',
    'CollaboratorRejection',
    'SegmentationError',
    'ConfigurationError',
    'SessionError',
]
