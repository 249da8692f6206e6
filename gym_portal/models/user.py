from werkzeug.security import generate_password_hash, check_password_hash
from datetime import datetime, timezone
import uuid
from gym_portal.extensions import db
from gym_portal.models.enums import UserRole


def utcnow():
    return datetime.now(timezone.utc)


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(100), nullable=False)
    phone = db.Column(db.String(20))
    role = db.Column(db.Enum(UserRole), default=UserRole.STUDENT, nullable=False)

    # Account status
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    password_changed_at = db.Column(db.DateTime(timezone=True))

    # Timestamps
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    last_login = db.Column(db.DateTime(timezone=True))

    def set_password(self, password, changed_at=None):
        """Hash and store a new password.

        Pass ``changed_at`` when replacing an existing password so tokens
        issued before the change stop being accepted.
        """
        self.password_hash = generate_password_hash(password)
        if changed_at is not None:
            self.password_changed_at = changed_at

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def password_changed_after(self, issued_at):
        """True if the password was changed after ``issued_at`` (aware datetime)."""
        if not self.password_changed_at:
            return False
        changed = self.password_changed_at
        # SQLite hands back naive datetimes
        if changed.tzinfo is None:
            changed = changed.replace(tzinfo=timezone.utc)
        # Token iat has whole-second precision
        return int(issued_at.timestamp()) < int(changed.timestamp())

    @property
    def is_admin(self):
        return self.role.value in UserRole.admin_roles()

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'phone': self.phone,
            'role': self.role.value,
            'is_active': self.is_active,
            'created_at': self.created_at,
            'last_login': self.last_login
        }
