from gym_portal.models import Workout
from gym_portal.services.resources import ResourceLookup
from gym_portal.utils.api_response import APIResponse
from gym_portal.utils.decorators import auth_required, ownership_required, user_rate_limit, current_resource

from gym_portal.api.members import members_bp

workouts = ResourceLookup(Workout)


@members_bp.route('/workouts/<workout_id>', methods=['GET'])
@auth_required()
@ownership_required('workout_id', workouts)
@user_rate_limit()
def get_workout(workout_id):
    """Workout plan, visible to the owning student, the assigned trainer and admins"""
    workout = current_resource(workouts, workout_id)
    if workout is None:
        return APIResponse.not_found()
    return APIResponse.success(data={'workout': workout.to_dict()})
