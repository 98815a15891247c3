"""
Exception classes for pdfmend.

All pdfmend exceptions inherit from PdfMendError,
making it easy to catch all library errors.

Unknown words are normal input and never raise; only invariant
violations and resource failures propagate to the caller.

Example:
    >>> try:
    ...     doc = pdfmend.convert("paper.pdf")
    ... except pdfmend.VocabularyLoadError as e:
    ...     print(f"Lexicon could not be read: {e}")
    ... except pdfmend.PdfMendError as e:
    ...     print(f"pdfmend error: {e}")
"""


class PdfMendError(Exception):
    """
    Base exception for all pdfmend errors.

    Catch this to handle any pdfmend-specific error.
    """

    pass


class ConfigurationError(PdfMendError):
    """
    Raised for invalid or contradictory configuration.

    Example:
        >>> RepairConfig(force_character_split=True, skip_merge=True)
        ConfigurationError: force_character_split requires merging; ...
    """

    pass


class VocabularyLoadError(PdfMendError):
    """Raised when an external lexicon is unreadable or corrupt."""

    pass


class SegmentationInvariantViolation(PdfMendError):
    """
    Raised when the segmentation search fails to reach the end of its input.

    Every single token is admissible, so this signals a bound or model bug
    rather than bad input. Conversion of the current document is aborted.
    """

    pass


class InputEncodingError(PdfMendError):
    """Raised when a text block is not valid text in the expected encoding."""

    pass


class UnsupportedFormatError(PdfMendError):
    """
    Raised when document format is not supported.

    Example:
        >>> pdfmend.convert("file.docx")
        UnsupportedFormatError: Format of 'file.docx' is not supported. Supported: pdf
    """

    pass


class ExtractionError(PdfMendError):
    """
    Raised when extraction fails.

    This is only raised when config.on_extraction_error == "raise".
    Otherwise, extraction errors are logged as warnings.
    """

    pass
