from flask import current_app

from gym_portal.services.revocation import RevocationStore, create_redis_client
from gym_portal.services.tokens import TokenService
from gym_portal.services.users import UserDirectory


EXTENSION_KEY = 'gym_portal.security'


class SecurityServices:
    """Collaborators of the request guards, built once per app"""

    def __init__(self, tokens, revocation, users):
        self.tokens = tokens
        self.revocation = revocation
        self.users = users


def init_security(app, redis_client=None, users=None, clock=None):
    """
    Build the guard collaborators and register them on ``app``

    Pass ``redis_client`` to use an existing client (or a test double)
    instead of connecting with the REDIS_* settings.
    """
    if redis_client is None:
        redis_client = create_redis_client(app.config)
        if redis_client is None and app.config.get('REDIS_ENABLED', True):
            app.logger.warning(
                "Redis unavailable, token revocation and rate limiting are %s",
                'disabled' if app.config['STORE_FAIL_OPEN'] else 'rejecting requests'
            )

    token_kwargs = {'clock': clock} if clock else {}
    services = SecurityServices(
        tokens=TokenService(app.config['JWT_ACCESS_TOKEN_EXPIRES'], **token_kwargs),
        revocation=RevocationStore(redis_client, fail_open=app.config['STORE_FAIL_OPEN']),
        users=users or UserDirectory()
    )
    app.extensions[EXTENSION_KEY] = services
    return services


def get_security():
    return current_app.extensions[EXTENSION_KEY]
