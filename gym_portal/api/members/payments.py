from gym_portal.models import Payment
from gym_portal.models.enums import UserRole
from gym_portal.services.resources import ResourceLookup
from gym_portal.utils.api_response import APIResponse
from gym_portal.utils.decorators import (
    auth_required, role_required, ownership_required, user_rate_limit, current_resource
)

from gym_portal.api.members import members_bp

payments = ResourceLookup(Payment)


@members_bp.route('/payments/<payment_id>', methods=['GET'])
@auth_required()
@role_required(UserRole.STUDENT, UserRole.ADMIN, UserRole.SUPER_ADMIN)
@ownership_required('payment_id', payments)
@user_rate_limit()
def get_payment(payment_id):
    """Payment details, visible to the paying student and admins"""
    payment = current_resource(payments, payment_id)
    if payment is None:
        return APIResponse.not_found()
    return APIResponse.success(data={'payment': payment.to_dict()})
