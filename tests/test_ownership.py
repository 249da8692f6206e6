"""
Tests for resource ownership checks
Run with: pytest tests/test_ownership.py -v
"""
import json
import uuid

import pytest

from gym_portal.models import AuditLog, User
from gym_portal.models.enums import UserRole
from gym_portal.services.resources import ResourceLookup
from gym_portal.utils.api_response import APIResponse
from gym_portal.utils.decorators import auth_required, ownership_required, current_resource


def error_message(response):
    return json.loads(response.data)['error']['message']


class TestStudentOwnership:

    def test_student_reads_own_record(self, client, student_record, student_user, auth_headers):
        response = client.get(f'/api/students/{student_record.id}', headers=auth_headers(student_user))

        assert response.status_code == 200
        assert json.loads(response.data)['data']['student']['id'] == student_record.id

    def test_assigned_trainer_reads_record(self, client, student_record, trainer_user, auth_headers):
        response = client.get(f'/api/students/{student_record.id}', headers=auth_headers(trainer_user))
        assert response.status_code == 200

    def test_other_student_forbidden(self, client, student_record, other_student_user, auth_headers):
        response = client.get(f'/api/students/{student_record.id}', headers=auth_headers(other_student_user))

        assert response.status_code == 403
        assert error_message(response) == 'Access denied. You can only access your own resources.'

    def test_unassigned_trainer_forbidden(self, client, student_record, make_user, auth_headers):
        other_trainer = make_user(UserRole.TRAINER)

        response = client.get(f'/api/students/{student_record.id}', headers=auth_headers(other_trainer))

        assert response.status_code == 403

    @pytest.mark.parametrize('role', [UserRole.ADMIN, UserRole.SUPER_ADMIN])
    def test_admins_bypass_ownership(self, client, student_record, make_user, auth_headers, role):
        response = client.get(f'/api/students/{student_record.id}', headers=auth_headers(make_user(role)))
        assert response.status_code == 200

    def test_missing_record(self, client, student_user, auth_headers):
        response = client.get(f'/api/students/{uuid.uuid4()}', headers=auth_headers(student_user))

        assert response.status_code == 404
        assert error_message(response) == 'Resource not found.'

    def test_missing_record_for_admin(self, client, admin_user, auth_headers):
        response = client.get(f'/api/students/{uuid.uuid4()}', headers=auth_headers(admin_user))
        assert response.status_code == 404

    def test_denial_audited(self, client, student_record, other_student_user, auth_headers):
        client.get(f'/api/students/{student_record.id}', headers=auth_headers(other_student_user))

        entry = AuditLog.query.filter_by(action='security:unauthorized_resource_access').first()
        assert entry is not None
        assert entry.user_id == other_student_user.id
        assert entry.changes['resource_type'] == 'Student'
        assert entry.changes['resource_id'] == student_record.id

    def test_lookup_failure_returns_generic_error(self, client, student_user, auth_headers, monkeypatch):
        from gym_portal.api.members import students as students_module

        def broken_lookup(resource_id):
            raise RuntimeError('database is gone')

        monkeypatch.setattr(students_module.students, 'find_by_id', broken_lookup)
        response = client.get(f'/api/students/{uuid.uuid4()}', headers=auth_headers(student_user))

        assert response.status_code == 500
        assert 'database' not in response.get_data(as_text=True)


class TestWorkoutOwnership:

    def test_owner_and_trainer_allowed(self, client, workout, student_user, trainer_user, auth_headers):
        for user in (student_user, trainer_user):
            response = client.get(f'/api/workouts/{workout.id}', headers=auth_headers(user))
            assert response.status_code == 200

    def test_other_student_forbidden(self, client, workout, other_student_user, auth_headers):
        response = client.get(f'/api/workouts/{workout.id}', headers=auth_headers(other_student_user))
        assert response.status_code == 403


class TestPaymentOwnership:

    def test_paying_student_allowed(self, client, payment, student_user, auth_headers):
        response = client.get(f'/api/payments/{payment.id}', headers=auth_headers(student_user))

        assert response.status_code == 200
        assert json.loads(response.data)['data']['payment']['id'] == payment.id

    def test_other_student_forbidden(self, client, payment, other_student_user, auth_headers):
        response = client.get(f'/api/payments/{payment.id}', headers=auth_headers(other_student_user))
        assert response.status_code == 403

    def test_trainer_rejected_by_role_before_ownership(self, client, payment, trainer_user, auth_headers):
        response = client.get(f'/api/payments/{payment.id}', headers=auth_headers(trainer_user))

        assert response.status_code == 403
        assert error_message(response) == 'Access denied. Insufficient permissions.'

    def test_admin_allowed(self, client, payment, admin_user, auth_headers):
        response = client.get(f'/api/payments/{payment.id}', headers=auth_headers(admin_user))
        assert response.status_code == 200


class TestSelfOwnership:
    """A resource whose id is the caller's own id counts as owned"""

    @pytest.fixture
    def users(self):
        return ResourceLookup(User)

    @pytest.fixture
    def profile_app(self, app, users):
        @auth_required()
        @ownership_required('user_id', users)
        def user_profile(user_id):
            return APIResponse.success(data={'user': current_resource(users, user_id).to_dict()})

        app.add_url_rule('/test/users/<user_id>', 'user_profile', user_profile)
        return app

    def test_is_owner_matches_resource_id(self, users, student_user, other_student_user):
        assert users.owner_fields == ()
        assert users.is_owner(student_user, student_user.id) is True
        assert users.is_owner(student_user, other_student_user.id) is False

    def test_caller_reads_own_record(self, profile_app, student_user, auth_headers):
        response = profile_app.test_client().get(
            f'/test/users/{student_user.id}', headers=auth_headers(student_user)
        )

        assert response.status_code == 200
        assert json.loads(response.data)['data']['user']['id'] == student_user.id

    def test_other_user_forbidden(self, profile_app, student_user, other_student_user, auth_headers):
        response = profile_app.test_client().get(
            f'/test/users/{student_user.id}', headers=auth_headers(other_student_user)
        )

        assert response.status_code == 403
        assert error_message(response) == 'Access denied. You can only access your own resources.'

    def test_admin_reads_any_record(self, profile_app, student_user, admin_user, auth_headers):
        response = profile_app.test_client().get(
            f'/test/users/{student_user.id}', headers=auth_headers(admin_user)
        )
        assert response.status_code == 200
