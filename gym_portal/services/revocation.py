"""
Redis backed store for revoked tokens and per-user request counters.

When Redis is missing or failing the store either degrades (the token
counts as not revoked, the counter as zero) or raises
StoreUnavailableError, depending on ``fail_open``. Degraded calls are
always reported as security events.
"""
import redis
from flask import current_app

from gym_portal.utils.audit_logging import AuditLogger
from gym_portal.utils.errors import StoreUnavailableError


REVOKED_PREFIX = 'blacklist:'
RATE_LIMIT_PREFIX = 'rate_limit:'


def create_redis_client(config):
    """Build a Redis client from app config and check it answers PING.

    Returns None if Redis is disabled or unreachable; the app keeps running
    without revocation and rate limiting in that case.
    """
    if not config.get('REDIS_ENABLED', True):
        return None

    client = redis.Redis(
        host=config['REDIS_HOST'],
        port=config['REDIS_PORT'],
        db=config['REDIS_DB'],
        password=config['REDIS_PASSWORD'],
        socket_connect_timeout=config['REDIS_CONNECT_TIMEOUT'],
        socket_timeout=config['REDIS_SOCKET_TIMEOUT'],
        decode_responses=True
    )
    try:
        client.ping()
    except redis.RedisError:
        client.close()
        return None
    return client


class RevocationStore:
    """Token denylist and fixed-window request counters"""

    def __init__(self, client, fail_open=True):
        self.client = client
        self.fail_open = fail_open

    def _degraded(self, event, operation, error=None):
        AuditLogger.log_security(
            event,
            operation=operation,
            reason=str(error) if error else 'store not configured',
            fail_open=self.fail_open
        )
        if not self.fail_open:
            raise StoreUnavailableError(operation) from error

    def revoke(self, token, ttl):
        """Mark ``token`` invalid for ``ttl`` seconds. Returns False if not stored."""
        if self.client is None:
            self._degraded('revocation_store_unavailable', 'revoke')
            return False
        try:
            self.client.set(REVOKED_PREFIX + token, '1', ex=max(1, int(ttl)))
        except redis.RedisError as e:
            self._degraded('revocation_store_unavailable', 'revoke', e)
            return False
        return True

    def is_revoked(self, token):
        if self.client is None:
            self._degraded('revocation_store_unavailable', 'is_revoked')
            return False
        try:
            return bool(self.client.exists(REVOKED_PREFIX + token))
        except redis.RedisError as e:
            self._degraded('revocation_store_unavailable', 'is_revoked', e)
            return False

    def increment_counter(self, user_id, window_ttl_seconds):
        """
        Increment the request counter of ``user_id`` and return the new value

        The key is created with the window TTL on the first request of a
        window and only incremented afterwards, both in one MULTI/EXEC round
        trip. Returns 0 when degraded.
        """
        if self.client is None:
            self._degraded('rate_limit_store_unavailable', 'increment_counter')
            return 0
        key = f'{RATE_LIMIT_PREFIX}{user_id}'
        try:
            pipe = self.client.pipeline(transaction=True)
            pipe.set(key, 0, ex=max(1, int(window_ttl_seconds)), nx=True)
            pipe.incr(key)
            _, count = pipe.execute()
        except redis.RedisError as e:
            self._degraded('rate_limit_store_unavailable', 'increment_counter', e)
            return 0
        return int(count)

    def health(self):
        if self.client is None:
            return {'status': 'unavailable', 'message': 'Redis client not initialized'}
        try:
            self.client.ping()
            return {'status': 'healthy', 'message': 'Redis connection is working'}
        except redis.RedisError as e:
            current_app.logger.error(f"Redis health check failed: {str(e)}")
            return {'status': 'unhealthy', 'message': 'Redis connection failed'}
