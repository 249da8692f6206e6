import time
import uuid
from decimal import Decimal

import pytest
import redis

from gym_portal import create_app
from gym_portal.extensions import db as _db
from gym_portal.models import User, Student, Workout, Payment
from gym_portal.models.enums import UserRole, StudentStatus
from gym_portal.services.security import get_security
from config import Config


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    JWT_SECRET_KEY = 'test-secret-key'
    JWT_ACCESS_TOKEN_EXPIRES = 3600
    REDIS_ENABLED = False
    STORE_FAIL_OPEN = True
    RATE_LIMIT_MAX_REQUESTS = 100
    RATE_LIMIT_WINDOW_SECONDS = 900
    AUDIT_SECURITY_EVENTS = True


class FakeClock:
    """Controllable time source shared by the token service and the fake Redis"""

    def __init__(self):
        self.now = time.time()

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeRedis:
    """In-memory stand-in for the subset of redis.Redis the store uses"""

    def __init__(self, clock):
        self.clock = clock
        self.data = {}
        self.expiry = {}

    def _purge(self, key):
        expires_at = self.expiry.get(key)
        if expires_at is not None and self.clock() >= expires_at:
            self.data.pop(key, None)
            self.expiry.pop(key, None)

    def ping(self):
        return True

    def close(self):
        pass

    def get(self, key):
        self._purge(key)
        return self.data.get(key)

    def set(self, key, value, ex=None, nx=False):
        self._purge(key)
        if nx and key in self.data:
            return None
        self.data[key] = str(value)
        if ex is not None:
            self.expiry[key] = self.clock() + ex
        else:
            self.expiry.pop(key, None)
        return True

    def exists(self, *keys):
        count = 0
        for key in keys:
            self._purge(key)
            count += key in self.data
        return count

    def incr(self, key):
        self._purge(key)
        value = int(self.data.get(key, 0)) + 1
        self.data[key] = str(value)
        return value

    def ttl(self, key):
        self._purge(key)
        if key not in self.data:
            return -2
        if key not in self.expiry:
            return -1
        return int(self.expiry[key] - self.clock())

    def pipeline(self, transaction=True):
        return FakePipeline(self)


class FakePipeline:
    def __init__(self, client):
        self.client = client
        self.commands = []

    def set(self, *args, **kwargs):
        self.commands.append(('set', args, kwargs))
        return self

    def incr(self, *args, **kwargs):
        self.commands.append(('incr', args, kwargs))
        return self

    def execute(self):
        results = [getattr(self.client, name)(*args, **kwargs) for name, args, kwargs in self.commands]
        self.commands = []
        return results


class FailingRedis:
    """Client whose every command fails as if Redis went away"""

    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise redis.ConnectionError('Connection refused')
        return fail


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_redis(clock):
    return FakeRedis(clock)


@pytest.fixture
def config_class():
    return TestConfig


@pytest.fixture
def redis_client(fake_redis):
    return fake_redis


@pytest.fixture
def app(config_class, redis_client, clock):
    app = create_app(config_class, redis_client=redis_client, clock=clock)

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def security(app):
    return get_security()


@pytest.fixture
def make_user(db):
    """Factory creating a committed user with password 'TestPass123'"""
    def _make_user(role=UserRole.STUDENT, email=None, is_active=True, name='Test User'):
        user = User(
            id=str(uuid.uuid4()),
            email=email or f'{role.value}-{uuid.uuid4().hex[:8]}@example.com',
            name=name,
            role=role,
            is_active=is_active
        )
        user.set_password('TestPass123')
        db.session.add(user)
        db.session.commit()
        return user
    return _make_user


@pytest.fixture
def student_user(make_user):
    return make_user(UserRole.STUDENT, email='student@example.com')


@pytest.fixture
def other_student_user(make_user):
    return make_user(UserRole.STUDENT, email='other.student@example.com')


@pytest.fixture
def trainer_user(make_user):
    return make_user(UserRole.TRAINER, email='trainer@example.com')


@pytest.fixture
def admin_user(make_user):
    return make_user(UserRole.ADMIN, email='admin@example.com')


@pytest.fixture
def super_admin_user(make_user):
    return make_user(UserRole.SUPER_ADMIN, email='root@example.com')


@pytest.fixture
def auth_headers(security):
    """Build an Authorization header for a user"""
    def _auth_headers(user):
        return {'Authorization': f'Bearer {security.tokens.issue(user.id)}'}
    return _auth_headers


@pytest.fixture
def student_record(db, student_user, trainer_user):
    student = Student(
        user_id=student_user.id,
        trainer_id=trainer_user.id,
        registration_number='STU0001',
        status=StudentStatus.ACTIVE
    )
    db.session.add(student)
    db.session.commit()
    return student


@pytest.fixture
def workout(db, student_user, trainer_user):
    workout = Workout(student_user_id=student_user.id, trainer_id=trainer_user.id, name='Full body A')
    db.session.add(workout)
    db.session.commit()
    return workout


@pytest.fixture
def payment(db, student_user):
    payment = Payment(payment_reference='PAY-0001', student_user_id=student_user.id, amount=Decimal('149.90'))
    db.session.add(payment)
    db.session.commit()
    return payment


@pytest.fixture
def failing_redis():
    return FailingRedis()
