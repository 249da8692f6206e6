from flask import request, current_app
import uuid

from gym_portal.extensions import db
from gym_portal.models import User, Student
from gym_portal.models.enums import UserRole, StudentStatus
from gym_portal.api.auth.schemas import AuthSchemas
from gym_portal.api.auth.access import token_payload
from gym_portal.services.security import get_security
from gym_portal.utils.api_response import APIResponse
from gym_portal.utils.audit_logging import AuditLogger

from gym_portal.api.auth import auth_bp


@auth_bp.route('/register', methods=['POST'])
def register():
    """
    Register a new student account

    Trainer and admin accounts are created by admins, never through this
    endpoint. A pending student record is created with the account.

    Request Body:
        {
            "fullName": "John Doe",
            "email": "john@example.com",
            "password": "SecurePass123",
            "confirmPassword": "SecurePass123",
            "phone": "+5511999999999" (optional)
        }

    Returns:
        201: User created with token
        409: Email already exists
        422: Validation error
    """
    try:
        data = request.get_json(silent=True)

        is_valid, errors, cleaned_data = AuthSchemas.validate_registration(data)
        if not is_valid:
            return APIResponse.validation_error(errors)

        if User.query.filter_by(email=cleaned_data['email']).first():
            return APIResponse.error('Email already registered', status_code=409)

        user = User(
            id=str(uuid.uuid4()),
            email=cleaned_data['email'],
            name=cleaned_data['name'],
            phone=cleaned_data.get('phone'),
            role=UserRole.STUDENT,
            is_active=True
        )
        user.set_password(cleaned_data['password'])
        db.session.add(user)

        student = Student(
            user_id=user.id,
            registration_number=f'STU{uuid.uuid4().hex[:10].upper()}',
            status=StudentStatus.PENDING
        )
        db.session.add(student)
        db.session.commit()

        AuditLogger.log_action(
            user_id=user.id,
            action='user_registered',
            entity_type='user',
            entity_id=user.id,
            description=f'New user registered: {user.email}',
            ip_address=request.remote_addr,
            user_agent=request.headers.get('User-Agent')
        )
        current_app.logger.info(f"New user registered: {user.id}")

        return APIResponse.success(
            data={
                'user': user.to_dict(),
                'student': student.to_dict(),
                'tokens': token_payload(get_security().tokens.issue(user.id))
            },
            message='Registration successful',
            status_code=201
        )

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Registration error: {str(e)}")
        return APIResponse.internal_error('An error occurred during registration. Please try again.')
