"""
Access token issuing and verification.

Tokens are HS256 JWTs created through flask-jwt-extended. The lifetime is
checked here from the ``iat`` claim rather than trusted from ``exp`` so a
shorter configured lifetime also applies to tokens already handed out.
The injectable clock is used for verification only.
"""
import time
from collections import namedtuple
from datetime import datetime, timedelta, timezone

import jwt as pyjwt
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException

from gym_portal.utils.errors import InvalidTokenError, TokenExpiredError


TokenClaims = namedtuple('TokenClaims', ['subject_id', 'issued_at'])


def lifetime_seconds(value):
    """Normalize a JWT_ACCESS_TOKEN_EXPIRES setting (int or timedelta) to seconds"""
    if isinstance(value, timedelta):
        return int(value.total_seconds())
    return int(value)


class TokenService:
    """Issue and verify signed, time-bound access tokens"""

    def __init__(self, lifetime, clock=time.time):
        self.lifetime = lifetime_seconds(lifetime)
        self.clock = clock

    def issue(self, subject_id):
        """Create a token for ``subject_id``. Requires an app context.

        ``iat`` is always the wall-clock time set by flask-jwt-extended;
        ``clock`` only governs verification. PyJWT rejects an ``iat`` in
        the future, so a clock running ahead of real time cannot be used to
        stamp tokens.
        """
        return create_access_token(
            identity=str(subject_id),
            expires_delta=timedelta(seconds=self.lifetime)
        )

    def verify(self, token):
        """
        Verify signature and lifetime of ``token``

        Returns:
            TokenClaims(subject_id, issued_at)

        Raises:
            InvalidTokenError: malformed token or bad signature
            TokenExpiredError: older than the configured lifetime
        """
        try:
            claims = decode_token(token, allow_expired=True)
        except (pyjwt.InvalidTokenError, JWTExtendedException) as e:
            raise InvalidTokenError() from e

        issued_at = claims.get('iat')
        subject_id = claims.get('sub')
        if not isinstance(issued_at, (int, float)) or not subject_id:
            raise InvalidTokenError()

        if self.clock() - issued_at >= self.lifetime:
            raise TokenExpiredError()

        return TokenClaims(
            subject_id=subject_id,
            issued_at=datetime.fromtimestamp(issued_at, tz=timezone.utc)
        )

    def remaining_lifetime(self, claims):
        """Seconds until ``claims`` expire, never less than 1"""
        elapsed = self.clock() - claims.issued_at.timestamp()
        return max(1, int(self.lifetime - elapsed))
