from gym_portal.models.user import User
from gym_portal.models.student import Student
from gym_portal.models.workout import Workout
from gym_portal.models.payment import Payment
from gym_portal.models.blog_article import BlogArticle
from gym_portal.models.audit_log import AuditLog
