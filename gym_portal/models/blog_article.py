from datetime import datetime, timezone
import uuid
from gym_portal.extensions import db


class BlogArticle(db.Model):
    __tablename__ = 'blog_articles'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = db.Column(db.String(200), nullable=False)
    summary = db.Column(db.Text)
    members_only = db.Column(db.Boolean, default=False, nullable=False)
    published_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'summary': self.summary,
            'members_only': self.members_only,
            'published_at': self.published_at
        }
