from gym_portal.extensions import db
from gym_portal.models import User


class UserDirectory:
    """Read-only lookup of user records for the auth guards"""

    def find_by_id(self, user_id):
        return db.session.get(User, user_id)
