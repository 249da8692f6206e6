"""
Tests for role based authorization
Run with: pytest tests/test_authorization.py -v
"""
import json
import logging

import pytest

from gym_portal.models import AuditLog
from gym_portal.models.enums import UserRole
from gym_portal.utils.api_response import APIResponse
from gym_portal.utils.decorators import role_required, admin_required


class TestRoleRequired:

    def test_student_cannot_list_students(self, client, student_user, auth_headers):
        response = client.get('/api/students', headers=auth_headers(student_user))

        assert response.status_code == 403
        error = json.loads(response.data)['error']
        assert error['message'] == 'Access denied. Insufficient permissions.'
        assert error['userRole'] == 'student'
        assert error['requiredRoles'] == ['admin', 'super_admin', 'trainer']

    @pytest.mark.parametrize('role', [UserRole.TRAINER, UserRole.ADMIN, UserRole.SUPER_ADMIN])
    def test_allowed_roles_pass(self, client, make_user, auth_headers, role):
        user = make_user(role)

        response = client.get('/api/students', headers=auth_headers(user))

        assert response.status_code == 200

    def test_denial_logged_and_audited(self, client, student_user, auth_headers, caplog):
        with caplog.at_level(logging.WARNING):
            client.get('/api/students', headers=auth_headers(student_user))

        records = [r for r in caplog.records if getattr(r, 'security_event', None) == 'unauthorized_access']
        assert len(records) == 1
        assert records[0].security_data['user_role'] == 'student'
        assert records[0].security_data['path'] == '/api/students'

        entry = AuditLog.query.filter_by(action='security:unauthorized_access').first()
        assert entry.user_id == student_user.id

    def test_unauthenticated_request_rejected_first(self, client):
        response = client.get('/api/students')

        assert response.status_code == 401
        assert json.loads(response.data)['error']['message'] == 'Access denied. No token provided.'


class TestGuardsWithoutAuthentication:
    """role_required on a view that never ran auth_required"""

    @pytest.fixture
    def unguarded_app(self, app):
        @role_required('student')
        def student_only():
            return APIResponse.success()

        @admin_required()
        def admin_only():
            return APIResponse.success()

        app.add_url_rule('/test/student-only', 'student_only', student_only)
        app.add_url_rule('/test/admin-only', 'admin_only', admin_only)
        return app

    @pytest.mark.parametrize('path', ['/test/student-only', '/test/admin-only'])
    def test_missing_user_is_unauthenticated(self, unguarded_app, path):
        response = unguarded_app.test_client().get(path)

        assert response.status_code == 401
        assert json.loads(response.data)['error']['message'] == 'Access denied. Authentication required.'
