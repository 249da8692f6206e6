from flask import request, current_app, g
from datetime import datetime, timezone

from gym_portal.extensions import db
from gym_portal.models import User
from gym_portal.api.auth.schemas import AuthSchemas
from gym_portal.api.auth.access import token_payload
from gym_portal.services.password_reset import (
    create_reset_token, load_reset_token, ResetTokenExpired, ResetTokenInvalid
)
from gym_portal.services.security import get_security
from gym_portal.utils.api_response import APIResponse
from gym_portal.utils.audit_logging import AuditLogger
from gym_portal.utils.decorators import auth_required
from gym_portal.utils.email import EmailService

from gym_portal.api.auth import auth_bp


@auth_bp.route('/change-password', methods=['POST'])
@auth_required()
def change_password():
    """
    Change the password of the current user

    Every token issued before the change stops working. A new token is
    returned so the caller stays logged in.

    Request Body:
        {
            "currentPassword": "OldPass123",
            "newPassword": "NewPass456",
            "confirmPassword": "NewPass456"
        }

    Returns:
        200: Password changed, new token
        400: Current password is wrong
        422: Validation error
    """
    try:
        data = request.get_json(silent=True)

        is_valid, errors, cleaned_data = AuthSchemas.validate_password_change(data)
        if not is_valid:
            return APIResponse.validation_error(errors)

        user = g.current_user
        if not user.check_password(cleaned_data['current_password']):
            return APIResponse.error('Current password is incorrect', status_code=400)

        user.set_password(cleaned_data['new_password'], changed_at=datetime.now(timezone.utc))
        db.session.commit()

        security = get_security()
        security.revocation.revoke(g.token, security.tokens.remaining_lifetime(g.token_claims))

        AuditLogger.log_action(
            user_id=user.id,
            action='password_changed',
            description='Password changed',
            ip_address=request.remote_addr,
            user_agent=request.headers.get('User-Agent')
        )

        return APIResponse.success(
            data={'tokens': token_payload(security.tokens.issue(user.id))},
            message='Password changed successfully'
        )

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Password change error: {str(e)}")
        return APIResponse.internal_error('An error occurred while changing the password')


@auth_bp.route('/forgot-password', methods=['POST'])
def forgot_password():
    """
    Request a password reset email

    Request Body:
        {
            "email": "john@example.com"
        }

    Returns:
        200: Always, whether or not the account exists
        422: Validation error
    """
    try:
        data = request.get_json(silent=True)

        is_valid, errors, cleaned_data = AuthSchemas.validate_password_reset_request(data)
        if not is_valid:
            return APIResponse.validation_error(errors)

        # Don't reveal whether the account exists
        user = User.query.filter_by(email=cleaned_data['email']).first()

        if user and user.is_active:
            reset_token = create_reset_token(user)
            reset_url = f"{current_app.config['FRONTEND_URL']}/reset-password?token={reset_token}"

            try:
                EmailService.send_password_reset_email(user, reset_url)
            except Exception as e:
                current_app.logger.error(f"Failed to send reset email: {str(e)}")

            AuditLogger.log_action(
                user_id=user.id,
                action='password_reset_requested',
                description='Password reset requested',
                ip_address=request.remote_addr,
                user_agent=request.headers.get('User-Agent')
            )

        return APIResponse.success(
            message='If an account exists with that email, a password reset link has been sent.'
        )

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Password reset request error: {str(e)}")
        return APIResponse.internal_error('An error occurred. Please try again.')


@auth_bp.route('/reset-password', methods=['POST'])
def reset_password():
    """
    Set a new password with a reset token

    Tokens issued before the reset stop working for every session of the
    user.

    Request Body:
        {
            "token": "reset_token_here",
            "password": "NewSecurePass123",
            "confirmPassword": "NewSecurePass123"
        }

    Returns:
        200: Password reset successful
        401: Invalid or expired reset token
        422: Validation error
    """
    try:
        data = request.get_json(silent=True)

        is_valid, errors, cleaned_data = AuthSchemas.validate_password_reset_confirm(data)
        if not is_valid:
            return APIResponse.validation_error(errors)

        try:
            user = load_reset_token(cleaned_data['token'])
        except ResetTokenExpired:
            return APIResponse.unauthorized('The password reset link has expired.')
        except ResetTokenInvalid:
            return APIResponse.unauthorized('Invalid password reset token.')

        user.set_password(cleaned_data['password'], changed_at=datetime.now(timezone.utc))
        db.session.commit()

        AuditLogger.log_action(
            user_id=user.id,
            action='password_reset_success',
            description='Password reset using email token',
            ip_address=request.remote_addr,
            user_agent=request.headers.get('User-Agent')
        )

        return APIResponse.success(message='Password reset successful. You can now login with your new password.')

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Password reset confirm error: {str(e)}")
        return APIResponse.internal_error('An error occurred while resetting your password.')
