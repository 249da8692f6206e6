"""
Authentication API module
"""
from flask import Blueprint

# Create blueprint
auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')

from gym_portal.api.auth import access, password, profile, registration

__all__ = ['auth_bp']
