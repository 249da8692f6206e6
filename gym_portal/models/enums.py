import enum


class UserRole(enum.Enum):
    STUDENT = 'student'
    TRAINER = 'trainer'
    ADMIN = 'admin'
    SUPER_ADMIN = 'super_admin'

    @classmethod
    def admin_roles(cls):
        return {cls.ADMIN.value, cls.SUPER_ADMIN.value}


class StudentStatus(enum.Enum):
    PENDING = 'pending'
    ACTIVE = 'active'
    SUSPENDED = 'suspended'


class PaymentStatus(enum.Enum):
    PENDING = 'pending'
    PAID = 'paid'
    FAILED = 'failed'
    REFUNDED = 'refunded'
