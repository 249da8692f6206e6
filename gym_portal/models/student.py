from datetime import datetime, timezone
import uuid
from gym_portal.extensions import db
from gym_portal.models.enums import StudentStatus


class Student(db.Model):
    __tablename__ = 'students'

    # Attributes holding the user ids allowed to act on a student record
    owner_fields = ('user_id', 'trainer_id')

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)
    trainer_id = db.Column(db.String(36), db.ForeignKey('users.id'), index=True)
    registration_number = db.Column(db.String(30), unique=True, nullable=False)
    status = db.Column(db.Enum(StudentStatus), default=StudentStatus.PENDING, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    user = db.relationship('User', foreign_keys=[user_id])

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'trainer_id': self.trainer_id,
            'registration_number': self.registration_number,
            'status': self.status.value,
            'name': self.user.name if self.user else None,
            'created_at': self.created_at
        }
