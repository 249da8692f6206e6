"""
Error taxonomy for the request guards.

Guards raise these internally and turn them into JSON responses before
returning, so none of them escapes a guard. The app-level handlers in
``gym_portal.errors`` catch anything raised elsewhere.
"""


class APIError(Exception):
    """Base error carrying an HTTP status, a client-safe message and extra body fields"""

    status_code = 500
    default_message = 'Internal Server Error'

    def __init__(self, message=None, **context):
        self.message = message or self.default_message
        self.context = context
        super().__init__(self.message)

    def to_dict(self):
        body = {'message': self.message}
        body.update(self.context)
        return body


class UnauthenticatedError(APIError):
    status_code = 401
    default_message = 'Access denied. Authentication required.'


class InvalidTokenError(UnauthenticatedError):
    default_message = 'Invalid token.'


class TokenExpiredError(UnauthenticatedError):
    default_message = 'Token expired.'


class ForbiddenError(APIError):
    status_code = 403
    default_message = 'Access denied. Insufficient permissions.'


class NotFoundError(APIError):
    status_code = 404
    default_message = 'Resource not found.'


class RateLimitedError(APIError):
    status_code = 429
    default_message = 'Rate limit exceeded. Too many requests.'

    def __init__(self, retry_after, message=None):
        super().__init__(message, retryAfter=retry_after)
        self.retry_after = retry_after


class InternalError(APIError):
    status_code = 500


class StoreUnavailableError(Exception):
    """Revocation store unreachable while configured to fail closed"""
