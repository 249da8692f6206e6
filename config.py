import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-key-change-in-production'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///gym_portal.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # JWT Configuration
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY") or SECRET_KEY
    JWT_ACCESS_TOKEN_EXPIRES = int(os.getenv("JWT_ACCESS_TOKEN_EXPIRES", 604800))  # 7 days

    # Password reset links
    FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")
    PASSWORD_RESET_MAX_AGE = int(os.getenv("PASSWORD_RESET_MAX_AGE", 3600))  # 1 hour

    # Redis (revocation list and rate limit counters)
    REDIS_ENABLED = _env_bool('REDIS_ENABLED', True)
    REDIS_HOST = os.getenv('REDIS_HOST', 'localhost')
    REDIS_PORT = int(os.getenv('REDIS_PORT', 6379))
    REDIS_PASSWORD = os.getenv('REDIS_PASSWORD') or None
    REDIS_DB = int(os.getenv('REDIS_DB', 0))
    REDIS_CONNECT_TIMEOUT = float(os.getenv('REDIS_CONNECT_TIMEOUT', 10))
    REDIS_SOCKET_TIMEOUT = float(os.getenv('REDIS_SOCKET_TIMEOUT', 5))

    # When the store is unreachable, skip revocation and rate limit checks
    # instead of rejecting the request.
    STORE_FAIL_OPEN = _env_bool('STORE_FAIL_OPEN', True)

    # Per-user rate limiting
    RATE_LIMIT_MAX_REQUESTS = int(os.getenv('RATE_LIMIT_MAX_REQUESTS', 100))
    RATE_LIMIT_WINDOW_SECONDS = int(os.getenv('RATE_LIMIT_WINDOW_SECONDS', 900))  # 15 minutes

    # Persist security events to the audit_logs table as well as the log
    AUDIT_SECURITY_EVENTS = _env_bool('AUDIT_SECURITY_EVENTS', True)
