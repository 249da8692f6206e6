"""
Sample Data Generation
Creates a small set of accounts and records for local development
"""

from gym_portal.extensions import db
from gym_portal.models import User, Student, Workout, Payment, BlogArticle
from gym_portal.models.enums import UserRole, StudentStatus, PaymentStatus
from decimal import Decimal
import uuid


SAMPLE_PASSWORD = 'password123'


def create_sample_users():
    """Create one account per role"""
    print("   Creating users...")

    accounts = [
        ('superadmin@academia.local', 'Super Admin', UserRole.SUPER_ADMIN),
        ('admin@academia.local', 'Admin User', UserRole.ADMIN),
        ('trainer@academia.local', 'Carla Trainer', UserRole.TRAINER),
        ('student@academia.local', 'Bruno Student', UserRole.STUDENT),
    ]

    users = {}
    for email, name, role in accounts:
        user = User(id=str(uuid.uuid4()), email=email, name=name, role=role, is_active=True)
        user.set_password(SAMPLE_PASSWORD)
        db.session.add(user)
        users[role] = user

    db.session.commit()
    print(f"   ✓ Created {len(users)} users")
    return users


def create_sample_records(users):
    """Create a student record with a workout and a payment owned by the sample student"""
    print("   Creating student records...")

    student_user = users[UserRole.STUDENT]
    trainer = users[UserRole.TRAINER]

    student = Student(
        user_id=student_user.id,
        trainer_id=trainer.id,
        registration_number='STU0001',
        status=StudentStatus.ACTIVE
    )
    workout = Workout(student_user_id=student_user.id, trainer_id=trainer.id, name='Full body A')
    payment = Payment(
        payment_reference='PAY-0001',
        student_user_id=student_user.id,
        amount=Decimal('149.90'),
        status=PaymentStatus.PAID
    )

    db.session.add_all([student, workout, payment])
    db.session.commit()
    print("   ✓ Created student, workout and payment")
    return [student, workout, payment]


def create_sample_articles():
    print("   Creating blog articles...")
    articles = [
        BlogArticle(title='Five warm-up drills', summary='Get moving before lifting.'),
        BlogArticle(title='Member meal plan', summary='Weekly plan for members.', members_only=True),
    ]
    db.session.add_all(articles)
    db.session.commit()
    print(f"   ✓ Created {len(articles)} articles")
    return articles
