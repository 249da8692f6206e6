"""
Tests for admin user management
Run with: pytest tests/test_admin.py -v
"""
import json
import uuid

from gym_portal.models import AuditLog


class TestListUsers:

    def test_admin_lists_users(self, client, admin_user, student_user, trainer_user, auth_headers):
        response = client.get('/api/admin/users', headers=auth_headers(admin_user))

        assert response.status_code == 200
        data = json.loads(response.data)['data']
        assert data['pagination']['totalItems'] == 3
        assert {u['email'] for u in data['users']} == {
            'admin@example.com', 'student@example.com', 'trainer@example.com'
        }

    def test_filters(self, client, admin_user, student_user, make_user, auth_headers):
        make_user(email='former@example.com', is_active=False)
        headers = auth_headers(admin_user)

        by_role = json.loads(client.get('/api/admin/users?role=student', headers=headers).data)['data']
        assert by_role['pagination']['totalItems'] == 2

        inactive = json.loads(client.get('/api/admin/users?isActive=false', headers=headers).data)['data']
        assert [u['email'] for u in inactive['users']] == ['former@example.com']

        search = json.loads(client.get('/api/admin/users?search=former', headers=headers).data)['data']
        assert search['pagination']['totalItems'] == 1

    def test_invalid_role_filter(self, client, admin_user, auth_headers):
        response = client.get('/api/admin/users?role=wizard', headers=auth_headers(admin_user))
        assert response.status_code == 400

    def test_student_forbidden(self, client, student_user, auth_headers):
        response = client.get('/api/admin/users', headers=auth_headers(student_user))

        assert response.status_code == 403
        assert json.loads(response.data)['error']['requiredRoles'] == ['admin', 'super_admin']


class TestUpdateUserStatus:

    def test_deactivation_rejects_existing_tokens(self, client, admin_user, student_user, auth_headers):
        student_headers = auth_headers(student_user)
        assert client.get('/api/auth/me', headers=student_headers).status_code == 200

        response = client.patch(
            f'/api/admin/users/{student_user.id}/status',
            headers=auth_headers(admin_user),
            json={'isActive': False}
        )

        assert response.status_code == 200
        assert json.loads(response.data)['data']['user']['is_active'] is False

        response = client.get('/api/auth/me', headers=student_headers)
        assert response.status_code == 401
        assert json.loads(response.data)['error']['message'] == 'User no longer exists or is inactive.'

        entry = AuditLog.query.filter_by(action='user_deactivated').one()
        assert entry.user_id == admin_user.id
        assert entry.entity_id == student_user.id

    def test_reactivation(self, client, admin_user, make_user, auth_headers):
        user = make_user(is_active=False)

        response = client.patch(
            f'/api/admin/users/{user.id}/status',
            headers=auth_headers(admin_user),
            json={'isActive': True}
        )

        assert response.status_code == 200
        assert client.get('/api/auth/me', headers=auth_headers(user)).status_code == 200

    def test_invalid_body(self, client, admin_user, student_user, auth_headers):
        response = client.patch(
            f'/api/admin/users/{student_user.id}/status',
            headers=auth_headers(admin_user),
            json={'isActive': 'no'}
        )

        assert response.status_code == 422
        assert 'isActive' in json.loads(response.data)['error']['errors']

    def test_unknown_user(self, client, admin_user, auth_headers):
        response = client.patch(
            f'/api/admin/users/{uuid.uuid4()}/status',
            headers=auth_headers(admin_user),
            json={'isActive': False}
        )
        assert response.status_code == 404

    def test_cannot_change_own_status(self, client, admin_user, auth_headers):
        response = client.patch(
            f'/api/admin/users/{admin_user.id}/status',
            headers=auth_headers(admin_user),
            json={'isActive': False}
        )
        assert response.status_code == 400

    def test_admin_cannot_change_other_admin(self, client, admin_user, make_user, auth_headers):
        from gym_portal.models.enums import UserRole
        other_admin = make_user(UserRole.ADMIN)

        response = client.patch(
            f'/api/admin/users/{other_admin.id}/status',
            headers=auth_headers(admin_user),
            json={'isActive': False}
        )

        assert response.status_code == 403
        error = json.loads(response.data)['error']
        assert error['requiredRoles'] == ['super_admin']
        assert error['userRole'] == 'admin'
        assert other_admin.is_active is True

    def test_super_admin_can_change_admin(self, client, super_admin_user, admin_user, auth_headers):
        admin_headers = auth_headers(admin_user)

        response = client.patch(
            f'/api/admin/users/{admin_user.id}/status',
            headers=auth_headers(super_admin_user),
            json={'isActive': False}
        )

        assert response.status_code == 200
        assert client.get('/api/admin/users', headers=admin_headers).status_code == 401

    def test_student_cannot_change_status(self, client, student_user, other_student_user, auth_headers):
        response = client.patch(
            f'/api/admin/users/{other_student_user.id}/status',
            headers=auth_headers(student_user),
            json={'isActive': False}
        )
        assert response.status_code == 403
