"""
neuronest/errors.py

Error taxonomy shared by the bot pipeline and the HTTP layer.

Every error is terminal for the request that raised it. `status` is the HTTP
code the route layer answers with, and `public_message` is the only text that
ever reaches the caller; the exception's own message (which may hold SDK
errors or raw completion text) is for server-side logs.
"""


class BotError(Exception):
    """Base class for every failure surfaced to a bot caller."""

    status = 500
    default_message = "Server error"

    def __init__(self, message: str = "", public_message: str = ""):
        super().__init__(message or self.default_message)
        self.public_message = public_message or self.default_message


class AuthError(BotError):
    """Missing, malformed, expired or badly signed bearer token."""

    status = 401
    default_message = "Invalid token"

    def __init__(self, message: str = ""):
        # auth messages carry nothing sensitive, so callers see them as-is
        super().__init__(message, public_message=message or self.default_message)


class ForbiddenError(BotError):
    status = 403
    default_message = "You do not have permission to use this bot"


class ValidationError(BotError):
    """A required request field is missing or unusable."""

    status = 400
    default_message = "Invalid request"

    def __init__(self, message: str = ""):
        super().__init__(message, public_message=message or self.default_message)


class NotFoundError(BotError):
    status = 404
    default_message = "Record not found"

    def __init__(self, message: str = ""):
        super().__init__(message, public_message=message or self.default_message)


class CompletionFailure(BotError):
    """The completion service errored or returned an empty body."""

    status = 500
    default_message = "The completion service is unavailable"


class MalformedResponse(BotError):
    """Completion output was not JSON, not an object, or missed a field."""

    status = 500
    default_message = "The completion service returned an unusable response"
