"""
Signed, time-limited password reset tokens.

A token carries the user id and a stamp of the last password change, so it
stops working as soon as the password is changed, by reset or otherwise.
"""
from datetime import timezone

from flask import current_app
from itsdangerous import URLSafeTimedSerializer, SignatureExpired, BadSignature

from gym_portal.extensions import db
from gym_portal.models import User


RESET_SALT = 'password-reset-salt'


class ResetTokenExpired(Exception):
    pass


class ResetTokenInvalid(Exception):
    pass


def _serializer():
    return URLSafeTimedSerializer(current_app.config['SECRET_KEY'], salt=RESET_SALT)


def _password_stamp(user):
    changed = user.password_changed_at
    if not changed:
        return 0
    if changed.tzinfo is None:
        changed = changed.replace(tzinfo=timezone.utc)
    return int(changed.timestamp())


def create_reset_token(user):
    return _serializer().dumps({'uid': user.id, 'stamp': _password_stamp(user)})


def load_reset_token(token):
    """
    Return the active user a reset token was issued for

    Raises:
        ResetTokenExpired: older than PASSWORD_RESET_MAX_AGE
        ResetTokenInvalid: bad signature, unknown or inactive user, or the
            password changed since the token was issued
    """
    try:
        payload = _serializer().loads(token, max_age=current_app.config['PASSWORD_RESET_MAX_AGE'])
    except SignatureExpired as e:
        raise ResetTokenExpired() from e
    except BadSignature as e:
        raise ResetTokenInvalid() from e

    if not isinstance(payload, dict):
        raise ResetTokenInvalid()

    user = db.session.get(User, payload.get('uid'))
    if user is None or not user.is_active or payload.get('stamp') != _password_stamp(user):
        raise ResetTokenInvalid()
    return user
