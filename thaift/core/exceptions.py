"""
Core Exceptions Module
Defines custom exceptions for the thaift parser.
"""


class TokenizerError(Exception):
    """
    Base class for every error raised by the tokenizer.
    """
    pass


class DependencyError(TokenizerError):
    """
    Exception raised when a required dependency is missing or incompatible.

    Raised by the default boundary segmenter when pythainlp cannot be
    imported.
    """

    def __init__(self, message: str = None):
        """
        Initialize the DependencyError.

        Args:
            message: Error message describing the dependency issue
        """
        super().__init__(message)
        self.message = message


class AllocationFailure(TokenizerError):
    """
    Exception raised when a per-chunk buffer could not be obtained.

    Fatal to the current parse call.
    """
    pass


class EncodingConversionDefect(TokenizerError):
    """
    A byte sequence that could not be converted.

    Normally recorded on the normalized buffer and substituted; only raised
    when the tokenizer runs with strict_encoding enabled.
    """

    def __init__(self, stage: str, start: int, end: int, reason: str):
        """
        Initialize the defect record.

        Args:
            stage: 'decode' (source bytes) or 'encode' (normalized encoding)
            start: First offending position (byte for decode, char for encode)
            end: Position after the last offending one
            reason: Codec message
        """
        super().__init__(f'{stage} defect at [{start}, {end}): {reason}')
        self.stage = stage
        self.start = start
        self.end = end
        self.reason = reason


class CollaboratorRejection(TokenizerError):
    """
    Exception raised when the indexing collaborator refuses a word.
    """

    def __init__(self, offset: int, length: int, status: int = 1):
        super().__init__(f'word ({offset}, {length}) rejected with status {status}')
        self.offset = offset
        self.length = length
        self.status = status


class SegmentationError(TokenizerError):
    """
    Exception raised when the boundary-finder output does not partition its input.
    """
    pass


class ConfigurationError(TokenizerError):
    """
    Exception raised when tokenizer configuration or input encoding is invalid.
    """
    pass


class SessionError(TokenizerError):
    """
    Exception raised when session operations fail.
    """
    pass
