"""
Exception hierarchy for the analysis flow.

Everything raised below the interaction controller derives from
NutriscanError so the controller can turn it into its Error state.
"""


class NutriscanError(Exception):
    """Base class for errors surfaced to the user."""

    pass


class OracleError(NutriscanError):
    """The AI service reported a failure of its own (refusal, truncation, no content)."""

    pass


class TransportError(OracleError):
    """The AI service was unreachable or rejected the request."""

    pass


class ServiceUnavailableError(TransportError):
    """AI service temporarily unavailable."""

    pass


class RateLimitError(TransportError):
    """Too many requests to the AI service."""

    pass


class MalformedResponse(NutriscanError):
    """The AI service returned empty text or text that is not a JSON object."""

    pass


class ResponseContractError(NutriscanError):
    """A parsed response does not satisfy the shape required for its call."""

    pass


class AnalysisContractError(ResponseContractError):
    pass


class MealPlanContractError(ResponseContractError):
    pass


class MissingInputError(NutriscanError):
    """A clarification arrived with no retained image to pair it with."""

    pass


class InvalidImageError(NutriscanError):
    """The selected file is not a readable PNG or JPEG image."""

    pass
