"""
Public endpoints: health check and blog
"""
from flask import Blueprint

main_bp = Blueprint('main', __name__, url_prefix='/api')

from gym_portal.api.main import routes

__all__ = ['main_bp']
