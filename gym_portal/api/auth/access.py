from flask import request, current_app, g
from datetime import datetime, timezone

from gym_portal.extensions import db
from gym_portal.models import User
from gym_portal.api.auth.schemas import AuthSchemas
from gym_portal.services.security import get_security
from gym_portal.utils.api_response import APIResponse
from gym_portal.utils.audit_logging import AuditLogger
from gym_portal.utils.decorators import auth_required, user_rate_limit

from gym_portal.api.auth import auth_bp


def token_payload(token):
    return {
        'accessToken': token,
        'tokenType': 'Bearer',
        'expiresIn': get_security().tokens.lifetime
    }


@auth_bp.route('/login', methods=['POST'])
def login():
    """
    Login user with email and password

    Request Body:
        {
            "email": "john@example.com",
            "password": "SecurePass123"
        }

    Returns:
        200: Login successful with token
        401: Invalid credentials or inactive account
        422: Validation error
    """
    try:
        data = request.get_json(silent=True)

        # Validate input
        is_valid, errors, cleaned_data = AuthSchemas.validate_login(data)
        if not is_valid:
            return APIResponse.validation_error(errors)

        user = User.query.filter_by(email=cleaned_data['email']).first()

        if not user or not user.check_password(cleaned_data['password']):
            if user:
                AuditLogger.log_action(
                    user_id=user.id,
                    action='login_failed',
                    description='Failed login attempt - invalid password',
                    ip_address=request.remote_addr,
                    user_agent=request.headers.get('User-Agent')
                )
            return APIResponse.unauthorized('Invalid email or password')

        if not user.is_active:
            return APIResponse.unauthorized('Account is not active')

        user.last_login = datetime.now(timezone.utc)
        db.session.commit()

        AuditLogger.log_action(
            user_id=user.id,
            action='user_login',
            description=f'User logged in: {user.email}',
            ip_address=request.remote_addr,
            user_agent=request.headers.get('User-Agent')
        )
        current_app.logger.info(f"User logged in: {user.id}")

        access_token = get_security().tokens.issue(user.id)

        return APIResponse.success(
            data={
                'user': user.to_dict(),
                'tokens': token_payload(access_token)
            },
            message='Login successful'
        )

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Login error: {str(e)}")
        return APIResponse.internal_error('An error occurred during login. Please try again.')


@auth_bp.route('/logout', methods=['POST'])
@auth_required()
def logout():
    """
    Logout user and revoke the presented token for the rest of its lifetime

    Headers:
        Authorization: Bearer <access_token>

    Returns:
        200: Logout successful
    """
    try:
        security = get_security()
        ttl = security.tokens.remaining_lifetime(g.token_claims)
        revoked = security.revocation.revoke(g.token, ttl)

        AuditLogger.log_action(
            user_id=g.current_user.id,
            action='user_logout',
            description='User logged out' if revoked else 'User logged out, token not revoked (store unavailable)',
            ip_address=request.remote_addr,
            user_agent=request.headers.get('User-Agent')
        )

        return APIResponse.success(data={'tokenRevoked': revoked}, message='Logout successful')

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Logout error: {str(e)}")
        return APIResponse.internal_error('An error occurred during logout')


@auth_bp.route('/refresh', methods=['POST'])
@auth_required()
@user_rate_limit()
def refresh():
    """
    Exchange the presented token for a fresh one

    The old token is revoked so only one of the two stays usable.

    Returns:
        200: New access token
        401: Invalid, expired or revoked token
    """
    try:
        security = get_security()
        new_token = security.tokens.issue(g.current_user.id)
        security.revocation.revoke(g.token, security.tokens.remaining_lifetime(g.token_claims))

        return APIResponse.success(
            data={'tokens': token_payload(new_token)},
            message='Token refreshed successfully'
        )

    except Exception as e:
        current_app.logger.error(f"Token refresh error: {str(e)}")
        return APIResponse.internal_error('An error occurred during token refresh')
