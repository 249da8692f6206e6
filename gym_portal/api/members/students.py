from flask import request, current_app, g

from gym_portal.models import Student
from gym_portal.models.enums import UserRole
from gym_portal.services.resources import ResourceLookup
from gym_portal.utils.api_response import APIResponse
from gym_portal.utils.decorators import (
    auth_required, role_required, ownership_required, user_rate_limit, current_resource
)

from gym_portal.api.members import members_bp

students = ResourceLookup(Student)


@members_bp.route('/students', methods=['GET'])
@auth_required()
@role_required(UserRole.TRAINER, UserRole.ADMIN, UserRole.SUPER_ADMIN)
@user_rate_limit()
def list_students():
    """
    List students

    Trainers only see the students assigned to them.

    Query Parameters:
        page, perPage
    """
    try:
        page = request.args.get('page', 1, type=int)
        per_page = min(request.args.get('perPage', 20, type=int), 100)

        query = Student.query
        if g.current_user.role == UserRole.TRAINER:
            query = query.filter_by(trainer_id=g.current_user.id)

        pagination = query.order_by(Student.created_at.desc()).paginate(
            page=page, per_page=per_page, error_out=False
        )

        return APIResponse.success(data={
            'students': [student.to_dict() for student in pagination.items],
            'pagination': {
                'page': pagination.page,
                'perPage': pagination.per_page,
                'total': pagination.total,
                'pages': pagination.pages
            }
        })

    except Exception as e:
        current_app.logger.error(f"List students error: {str(e)}")
        return APIResponse.internal_error('Failed to load students')


@members_bp.route('/students/<student_id>', methods=['GET'])
@auth_required()
@ownership_required('student_id', students)
@user_rate_limit()
def get_student(student_id):
    """Student record, visible to the student, their trainer and admins"""
    student = current_resource(students, student_id)
    if student is None:
        return APIResponse.not_found()
    return APIResponse.success(data={'student': student.to_dict()})
