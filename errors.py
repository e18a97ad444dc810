class AnalyzerError(Exception):
    """Base class for failures surfaced by the analysis pipeline."""


class ExtractionError(AnalyzerError):
    """The resume document could not be turned into text."""


class ExternalServiceError(AnalyzerError):
    """The LLM endpoint was unreachable, timed out or answered with an error."""


class SchemaValidationError(AnalyzerError):
    """The model replied, but its output does not fit the declared shape."""


class InvalidInputError(AnalyzerError):
    """The caller supplied a blank resume or job description."""
