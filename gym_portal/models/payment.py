from datetime import datetime, timezone
import uuid
from gym_portal.extensions import db
from gym_portal.models.enums import PaymentStatus

class Payment(db.Model):
    __tablename__ = 'payments'

    owner_fields = ('student_user_id',)

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    payment_reference = db.Column(db.String(50), unique=True, nullable=False, index=True)
    student_user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)

    amount = db.Column(db.Numeric(10, 2), nullable=False)
    currency = db.Column(db.String(3), default='BRL')
    status = db.Column(db.Enum(PaymentStatus), default=PaymentStatus.PENDING, nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'payment_reference': self.payment_reference,
            'student_user_id': self.student_user_id,
            'amount': float(self.amount),
            'currency': self.currency,
            'status': self.status.value,
            'created_at': self.created_at.isoformat()
        }
