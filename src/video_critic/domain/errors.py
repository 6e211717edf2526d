"""Error taxonomy for the analysis pipeline.

Every error carries the HTTP status it maps to when raised while a
submission is being accepted. Inside the background pipeline the same
errors only turn the submission ``failed``.
"""


class VideoCriticError(Exception):
    """Base class for all domain errors."""

    http_status: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(VideoCriticError):
    """Missing or malformed request fields."""

    http_status = 400


class InvalidReference(VideoCriticError):
    """A source URL that cannot be resolved to a video."""

    http_status = 400


class MisconfiguredCredentials(VideoCriticError):
    """An API key required by an external service is not configured."""

    http_status = 400


class UpstreamUnavailable(VideoCriticError):
    """The video platform failed or returned an incomplete payload."""

    http_status = 400


class MalformedUpstreamResponse(VideoCriticError):
    """The generative model returned unparseable or incomplete output."""

    http_status = 502


class PersistenceFailure(VideoCriticError):
    """A write to the result store failed."""

    http_status = 500
