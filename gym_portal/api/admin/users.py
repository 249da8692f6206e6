from flask import request, current_app, g
from sqlalchemy import or_, desc
from datetime import datetime, timezone

from gym_portal.api.admin import admin_bp
from gym_portal.models import User
from gym_portal.models.enums import UserRole
from gym_portal.extensions import db
from gym_portal.utils.decorators import auth_required, admin_required, user_rate_limit
from gym_portal.utils.api_response import APIResponse
from gym_portal.utils.audit_logging import AuditLogger
from gym_portal.api.admin.schemas import AdminSchemas

# ===== USER MANAGEMENT =====

@admin_bp.route('/users', methods=['GET'])
@auth_required()
@admin_required()
@user_rate_limit()
def get_users():
    """
    Get paginated list of users with filtering and search

    Query params:
        - page: Page number (default: 1)
        - perPage: Items per page (default: 20, max: 100)
        - search: Search in name/email
        - role: Filter by role
        - isActive: Filter by active status
    """
    try:
        args = request.args.to_dict()
        pagination = AdminSchemas.validate_pagination(args)

        query = User.query

        if args.get('search'):
            search_term = f"%{args['search']}%"
            query = query.filter(
                or_(
                    User.name.ilike(search_term),
                    User.email.ilike(search_term)
                )
            )

        if args.get('role'):
            try:
                query = query.filter(User.role == UserRole(args['role'].lower()))
            except ValueError:
                return APIResponse.error("Invalid role filter")

        if args.get('isActive') in ['true', 'false']:
            query = query.filter(User.is_active == (args['isActive'] == 'true'))

        paginated = query.order_by(desc(User.created_at)).paginate(
            page=pagination['page'],
            per_page=pagination['per_page'],
            error_out=False
        )

        return APIResponse.success({
            'users': [user.to_dict() for user in paginated.items],
            'pagination': {
                'page': paginated.page,
                'perPage': paginated.per_page,
                'totalPages': paginated.pages,
                'totalItems': paginated.total
            }
        })

    except Exception as e:
        current_app.logger.error(f"Get users error: {str(e)}")
        return APIResponse.internal_error("Failed to fetch users")


@admin_bp.route('/users/<user_id>/status', methods=['PATCH'])
@auth_required()
@admin_required()
def update_user_status(user_id):
    """
    Activate or deactivate a user account

    Deactivated users are rejected by every guarded endpoint on their next
    request. Only super admins may change admin accounts, and nobody can
    deactivate themselves.
    """
    try:
        user = db.session.get(User, user_id)
        if not user:
            return APIResponse.not_found("User not found")

        is_valid, errors, cleaned_data = AdminSchemas.validate_user_status(request.get_json(silent=True))
        if not is_valid:
            return APIResponse.validation_error(errors)

        admin = g.current_user
        if user.id == admin.id:
            return APIResponse.error("You cannot change the status of your own account")

        if user.is_admin and admin.role != UserRole.SUPER_ADMIN:
            AuditLogger.log_security(
                'unauthorized_access',
                user_id=admin.id,
                user_role=admin.role.value,
                required_roles=[UserRole.SUPER_ADMIN.value],
                path=request.path,
                method=request.method
            )
            return APIResponse.forbidden(
                "Only super admins can change admin accounts",
                requiredRoles=[UserRole.SUPER_ADMIN.value],
                userRole=admin.role.value
            )

        user.is_active = cleaned_data['is_active']
        user.updated_at = datetime.now(timezone.utc)
        db.session.commit()

        action = 'user_activated' if user.is_active else 'user_deactivated'
        AuditLogger.log_action(
            user_id=admin.id,
            action=action,
            entity_type='user',
            entity_id=user_id,
            description=f'Admin changed status of user {user.email}',
            changes=cleaned_data,
            ip_address=request.remote_addr,
            user_agent=request.headers.get('User-Agent')
        )

        return APIResponse.success({'user': user.to_dict()}, message='User status updated successfully')

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Update user status error: {str(e)}")
        return APIResponse.internal_error("Failed to update user status")
