from flask import request, current_app, g
from datetime import datetime, timezone

from gym_portal.extensions import db
from gym_portal.api.auth.schemas import AuthSchemas
from gym_portal.utils.api_response import APIResponse
from gym_portal.utils.audit_logging import AuditLogger
from gym_portal.utils.decorators import auth_required, user_rate_limit

from gym_portal.api.auth import auth_bp


@auth_bp.route('/me', methods=['GET'])
@auth_required()
@user_rate_limit()
def get_current_user():
    """
    Get current authenticated user

    Headers:
        Authorization: Bearer <access_token>

    Returns:
        200: Current user data
        401: Invalid or expired token
    """
    return APIResponse.success(data={'user': g.current_user.to_dict()})


@auth_bp.route('/me', methods=['PUT'])
@auth_required()
@user_rate_limit()
def update_current_user():
    """
    Update name and phone of the current user

    Request Body:
        {
            "name": "John Doe",
            "phone": "+5511999999999"
        }

    Returns:
        200: Updated user
        422: Validation error
    """
    try:
        is_valid, errors, cleaned_data = AuthSchemas.validate_profile_update(request.get_json(silent=True))
        if not is_valid:
            return APIResponse.validation_error(errors)

        user = g.current_user
        for field, value in cleaned_data.items():
            setattr(user, field, value)
        user.updated_at = datetime.now(timezone.utc)
        db.session.commit()

        AuditLogger.log_action(
            user_id=user.id,
            action='profile_updated',
            entity_type='user',
            entity_id=user.id,
            description='Profile updated',
            changes=cleaned_data,
            ip_address=request.remote_addr,
            user_agent=request.headers.get('User-Agent')
        )

        return APIResponse.success(data={'user': user.to_dict()}, message='Profile updated successfully')

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Update profile error: {str(e)}")
        return APIResponse.internal_error('An error occurred while updating the profile')
