from flask import request
from werkzeug.exceptions import HTTPException

from gym_portal.utils.api_response import APIResponse
from gym_portal.utils.errors import APIError


def register_error_handlers(app):
    """Render every error raised from a view as the JSON error envelope"""

    @app.errorhandler(APIError)
    def handle_api_error(e):
        return APIResponse.from_exception(e)

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return APIResponse.error(e.description, status_code=e.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        app.logger.exception(f"Unhandled error on {request.method} {request.path}")
        return APIResponse.internal_error()
