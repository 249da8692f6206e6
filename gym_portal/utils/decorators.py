"""
Request guards

Stack them on a view, outermost first::

    @students_bp.route('/<student_id>')
    @auth_required()
    @role_required('student', 'trainer', 'admin')
    @ownership_required('student_id', ResourceLookup(Student))
    @user_rate_limit()
    def get_student(student_id): ...

Each guard either returns an error response or calls the next one. The
caller is available as ``g.current_user`` once ``auth_required`` passed.
"""
from functools import wraps

from flask import current_app, g, request

from gym_portal.models.enums import UserRole
from gym_portal.services.security import get_security
from gym_portal.utils.api_response import APIResponse
from gym_portal.utils.audit_logging import AuditLogger
from gym_portal.utils.errors import (
    APIError,
    ForbiddenError,
    NotFoundError,
    StoreUnavailableError,
    UnauthenticatedError,
)


def get_current_user():
    return g.get('current_user')


def extract_bearer_token():
    """Token from ``Authorization: Bearer <token>``, or None"""
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    token = token.strip()
    if scheme.lower() != 'bearer' or not token:
        return None
    return token


def _token_hint(token):
    return f'{token[:10]}...' if token else None


def authenticate_request(security):
    """
    Resolve the caller of the current request

    Returns:
        (user, token, claims)

    Raises:
        UnauthenticatedError (or a subclass) for every rejected token
    """
    token = extract_bearer_token()
    if not token:
        raise UnauthenticatedError('Access denied. No token provided.')

    # Checked before the signature so logout wins even for a valid token
    if security.revocation.is_revoked(token):
        raise UnauthenticatedError('Token has been invalidated.')

    claims = security.tokens.verify(token)

    user = security.users.find_by_id(claims.subject_id)
    if user is None or not user.is_active:
        raise UnauthenticatedError('User no longer exists or is inactive.')

    if user.password_changed_after(claims.issued_at):
        raise UnauthenticatedError('Password was changed. Please login again.')

    return user, token, claims


def auth_required(optional=False):
    """Decorator to require a valid access token

    With ``optional=True`` a missing or rejected token is not an error:
    the view runs with ``g.current_user`` set to None.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            g.current_user = None
            g.token = None
            g.token_claims = None
            g.resource = None

            try:
                user, token, claims = authenticate_request(get_security())
            except APIError as e:
                if not optional:
                    AuditLogger.log_security(
                        'invalid_token',
                        reason=e.message,
                        token=_token_hint(extract_bearer_token()),
                        path=request.path,
                        method=request.method
                    )
                    return APIResponse.from_exception(e)
            except Exception:
                current_app.logger.exception("Authentication error")
                if not optional:
                    return APIResponse.internal_error('Authentication error.')
            else:
                g.current_user = user
                g.token = token
                g.token_claims = claims

            return f(*args, **kwargs)
        return decorated_function
    return decorator


def optional_auth():
    """Attach the caller when a valid token is sent, continue anonymously otherwise"""
    return auth_required(optional=True)


def role_required(*roles):
    """Decorator to require specific user roles"""
    allowed = {role.value if isinstance(role, UserRole) else role for role in roles}

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user = get_current_user()
            if user is None:
                return APIResponse.from_exception(UnauthenticatedError())

            if user.role.value not in allowed:
                AuditLogger.log_security(
                    'unauthorized_access',
                    user_id=user.id,
                    user_role=user.role.value,
                    required_roles=sorted(allowed),
                    path=request.path,
                    method=request.method
                )
                return APIResponse.from_exception(ForbiddenError(
                    requiredRoles=sorted(allowed),
                    userRole=user.role.value
                ))

            return f(*args, **kwargs)
        return decorated_function
    return decorator


def admin_required():
    """Decorator to require an admin or super admin"""
    return role_required(UserRole.ADMIN, UserRole.SUPER_ADMIN)


def ownership_required(resource_id_param, lookup):
    """
    Decorator to restrict a resource to its owners

    Admins skip the check. Everybody else must be the resource itself or be
    named in one of ``lookup.owner_fields``. The loaded resource is put on
    ``g.resource``.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user = get_current_user()
            if user is None:
                return APIResponse.from_exception(UnauthenticatedError())

            if user.is_admin:
                return f(*args, **kwargs)

            resource_id = kwargs.get(resource_id_param)
            if resource_id is None:
                resource_id = (request.view_args or {}).get(resource_id_param)

            try:
                resource = lookup.find_by_id(resource_id) if resource_id is not None else None
            except Exception:
                current_app.logger.exception(f"Failed to load {lookup.resource_type} {resource_id}")
                return APIResponse.internal_error()

            if resource is None:
                return APIResponse.from_exception(NotFoundError())

            if not lookup.is_owner(resource, user.id):
                AuditLogger.log_security(
                    'unauthorized_resource_access',
                    user_id=user.id,
                    user_role=user.role.value,
                    resource_id=str(resource_id),
                    resource_type=lookup.resource_type
                )
                return APIResponse.from_exception(
                    ForbiddenError('Access denied. You can only access your own resources.')
                )

            g.resource = resource
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def current_resource(lookup, resource_id):
    """Resource loaded by ownership_required, or a fresh lookup (admins skip the guard's load)"""
    resource = g.get('resource')
    if resource is not None:
        return resource
    return lookup.find_by_id(resource_id)


def user_rate_limit(max_requests=None, window_seconds=None):
    """
    Decorator limiting each authenticated user to ``max_requests`` per window

    Defaults come from RATE_LIMIT_MAX_REQUESTS and RATE_LIMIT_WINDOW_SECONDS.
    Anonymous requests pass through untouched. The window is fixed: it
    starts with the first counted request and resets when the counter
    expires.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user = get_current_user()
            if user is None:
                return f(*args, **kwargs)

            limit = max_requests if max_requests is not None else current_app.config['RATE_LIMIT_MAX_REQUESTS']
            window = window_seconds if window_seconds is not None else current_app.config['RATE_LIMIT_WINDOW_SECONDS']

            try:
                count = get_security().revocation.increment_counter(user.id, window)
            except StoreUnavailableError:
                current_app.logger.error("Rate limit store unavailable, rejecting request")
                return APIResponse.internal_error()

            previous = count - 1
            if count > 0 and previous >= limit:
                AuditLogger.log_security(
                    'rate_limit_exceeded',
                    user_id=user.id,
                    requests=previous,
                    max_requests=limit,
                    path=request.path
                )
                return APIResponse.too_many_requests(window)

            return f(*args, **kwargs)
        return decorated_function
    return decorator
