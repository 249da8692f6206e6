"""
Member-facing resources: students, workouts and payments
"""
from flask import Blueprint

members_bp = Blueprint('members', __name__, url_prefix='/api')

from gym_portal.api.members import students, workouts, payments

__all__ = ['members_bp']
