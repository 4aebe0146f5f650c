"""Exceptions raised by the Lumière generation workflow.

All errors derive from :class:`LumiereError` so callers (the FastAPI layer
and the Gradio handlers) can catch the whole family in one place.  None of
them are handled inside the workflow itself: they propagate to the
immediate caller, which decides how to present them.
"""


class LumiereError(Exception):
    """Base class for every error raised by the generation workflow."""


class MissingAPIKeyError(LumiereError):
    """No Gemini credential is configured.

    Raised before any network call is attempted.
    """

    def __init__(self, message: str = "Missing API Key"):
        super().__init__(message)


class GeminiAPIError(LumiereError):
    """The Gemini endpoint answered with a non-success HTTP status.

    Attributes:
        status: HTTP status code
        reason: HTTP status text (e.g. ``"Bad Request"``)
        body: Raw response body
    """

    def __init__(self, status: int, reason: str, body: str):
        self.status = status
        self.reason = reason
        self.body = body
        super().__init__(f"API Error: {status} {reason} - {body}")


class TextInsteadOfImageError(LumiereError):
    """The image model answered with text and no inline image data.

    Attributes:
        text: The text the model returned
    """

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"The model responded with text instead of an image: {text}")


class NoImageDataError(LumiereError):
    """The image model response carried neither image data nor text."""

    def __init__(self, message: str = "No image data found in response"):
        super().__init__(message)


class MalformedResponseError(NoImageDataError):
    """A success response whose body is not a JSON object.

    Attributes:
        model: Model that produced the response
    """

    def __init__(self, model: str, detail: str):
        self.model = model
        super().__init__(f"No image data found in response: malformed body from {model} ({detail})")
