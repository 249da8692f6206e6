from datetime import datetime, timezone
import uuid
from gym_portal.extensions import db


class Workout(db.Model):
    __tablename__ = 'workouts'

    owner_fields = ('student_user_id', 'trainer_id')

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    student_user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)
    trainer_id = db.Column(db.String(36), db.ForeignKey('users.id'), index=True)
    name = db.Column(db.String(100), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'student_user_id': self.student_user_id,
            'trainer_id': self.trainer_id,
            'name': self.name,
            'created_at': self.created_at
        }
