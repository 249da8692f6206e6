from flask import current_app, g
from sqlalchemy import text

from gym_portal.extensions import db
from gym_portal.models import BlogArticle
from gym_portal.services.security import get_security
from gym_portal.utils.api_response import APIResponse
from gym_portal.utils.decorators import optional_auth

from gym_portal.api.main import main_bp


@main_bp.route('/health', methods=['GET'])
def health():
    """
    Database and Redis status

    Returns 503 only when the database is down; a missing Redis degrades
    revocation and rate limiting but the API keeps serving.
    """
    services = {}

    try:
        db.session.execute(text('SELECT 1'))
        services['database'] = {'status': 'healthy', 'message': 'Database connection is working'}
    except Exception as e:
        current_app.logger.error(f"Database health check failed: {str(e)}")
        services['database'] = {'status': 'unhealthy', 'message': 'Database connection failed'}

    services['redis'] = get_security().revocation.health()

    healthy = services['database']['status'] == 'healthy'
    return APIResponse.success(
        data={'status': 'ok' if healthy else 'degraded', 'services': services},
        status_code=200 if healthy else 503
    )


@main_bp.route('/blog', methods=['GET'])
@optional_auth()
def list_articles():
    """
    Published blog articles

    Anonymous visitors get the public articles; logged-in members also see
    members-only ones.
    """
    try:
        query = BlogArticle.query
        is_member = g.current_user is not None
        if not is_member:
            query = query.filter_by(members_only=False)

        articles = query.order_by(BlogArticle.published_at.desc()).limit(50).all()

        return APIResponse.success(data={
            'articles': [article.to_dict() for article in articles],
            'isMember': is_member
        })

    except Exception as e:
        current_app.logger.error(f"List articles error: {str(e)}")
        return APIResponse.internal_error('Failed to load articles')
