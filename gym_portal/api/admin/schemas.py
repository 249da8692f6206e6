"""
Admin validation schemas
"""
from typing import Optional, Dict, Any, Tuple


class AdminSchemas:
    """Validation schemas for admin endpoints"""

    @staticmethod
    def validate_pagination(data: Dict[str, Any]) -> Dict[str, Any]:
        """Validate and clean pagination parameters"""
        page = 1
        per_page = 20

        if 'page' in data:
            try:
                page = max(1, int(data['page']))
            except (ValueError, TypeError):
                pass

        if 'perPage' in data:
            try:
                per_page = min(100, max(1, int(data['perPage'])))
            except (ValueError, TypeError):
                pass

        return {'page': page, 'per_page': per_page}

    @staticmethod
    def validate_user_status(data: Dict[str, Any]) -> Tuple[bool, Optional[Dict[str, str]], Optional[Dict[str, Any]]]:
        """
        Validate a user activation change

        Request Body:
            {"isActive": false}
        """
        errors = {}
        cleaned_data = {}
        data = data or {}

        is_active = data.get('isActive')
        if not isinstance(is_active, bool):
            errors['isActive'] = 'isActive must be true or false'
        else:
            cleaned_data['is_active'] = is_active

        is_valid = len(errors) == 0
        return is_valid, errors if not is_valid else None, cleaned_data if is_valid else None
