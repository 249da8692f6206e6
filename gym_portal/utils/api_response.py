from flask import jsonify

from gym_portal.utils.errors import InternalError, RateLimitedError


class APIResponse:
    """Standardized API response format"""

    @staticmethod
    def success(data=None, message=None, status_code=200):
        """Success response"""
        response = {
            'success': True,
            'message': message or 'Operation successful'
        }
        if data is not None:
            response['data'] = data
        return jsonify(response), status_code

    @staticmethod
    def error(message, status_code=400, headers=None, **context):
        """Error response

        Extra keyword arguments are merged into the ``error`` object, e.g.
        ``requiredRoles`` on a 403 or ``retryAfter`` on a 429.
        """
        error = {'message': message}
        error.update(context)
        response = jsonify({
            'success': False,
            'error': error
        })
        if headers:
            response.headers.update(headers)
        return response, status_code

    @staticmethod
    def from_exception(exc, headers=None):
        """Render an APIError from gym_portal.utils.errors"""
        return APIResponse.error(exc.message, status_code=exc.status_code, headers=headers, **exc.context)

    @staticmethod
    def validation_error(errors, message="Validation failed"):
        """Validation error response"""
        return APIResponse.error(message, status_code=422, errors=errors)

    @staticmethod
    def unauthorized(message="Access denied. Authentication required."):
        """Unauthorized response"""
        return APIResponse.error(message, status_code=401)

    @staticmethod
    def forbidden(message="Forbidden", **context):
        """Forbidden response"""
        return APIResponse.error(message, status_code=403, **context)

    @staticmethod
    def not_found(message="Resource not found."):
        """Not found response"""
        return APIResponse.error(message, status_code=404)

    @staticmethod
    def too_many_requests(retry_after, message=None):
        """Rate limit response with a Retry-After hint"""
        return APIResponse.from_exception(
            RateLimitedError(retry_after, message),
            headers={'Retry-After': str(retry_after)}
        )

    @staticmethod
    def internal_error(message=None):
        """Generic server error, never carries internal detail"""
        return APIResponse.from_exception(InternalError(message))
