"""
Authentication validation schemas
Provides validation for all authentication endpoints
"""
import re
from typing import Optional, Dict, Any, Tuple


class AuthSchemas:
    """Validation schemas for authentication endpoints"""

    @staticmethod
    def validate_registration(data: Dict[str, Any]) -> Tuple[bool, Optional[Dict[str, str]], Optional[Dict[str, Any]]]:
        """
        Validate student self-registration data

        Args:
            data: Dictionary with fullName, email, password, confirmPassword
                and an optional phone

        Returns:
            Tuple of (is_valid, errors, cleaned_data)
        """
        errors = {}
        cleaned_data = {}
        data = data or {}

        full_name = str(data.get('fullName') or '').strip()
        if not full_name:
            errors['fullName'] = 'Full name is required'
        elif not 2 <= len(full_name) <= 100:
            errors['fullName'] = 'Full name must be between 2 and 100 characters'
        else:
            cleaned_data['name'] = full_name

        email = str(data.get('email') or '').strip().lower()
        if not email:
            errors['email'] = 'Email is required'
        elif not AuthSchemas._validate_email_format(email):
            errors['email'] = 'Invalid email format'
        else:
            cleaned_data['email'] = email

        password = data.get('password') or ''
        password_errors = AuthSchemas._new_password_errors(
            password, data.get('confirmPassword') or '', field='password'
        )
        if password_errors:
            errors.update(password_errors)
        else:
            cleaned_data['password'] = password

        phone = str(data.get('phone') or '').strip()
        if phone:
            if not AuthSchemas._validate_phone(phone):
                errors['phone'] = 'Invalid phone number format'
            else:
                cleaned_data['phone'] = phone

        is_valid = len(errors) == 0
        return is_valid, errors if not is_valid else None, cleaned_data if is_valid else None

    @staticmethod
    def validate_login(data: Dict[str, Any]) -> Tuple[bool, Optional[Dict[str, str]], Optional[Dict[str, Any]]]:
        """
        Validate user login data

        Args:
            data: Dictionary containing login data

        Returns:
            Tuple of (is_valid, errors, cleaned_data)
        """
        errors = {}
        cleaned_data = {}
        data = data or {}

        # Email validation
        email = str(data.get('email') or '').strip().lower()
        if not email:
            errors['email'] = 'Email is required'
        elif not AuthSchemas._validate_email_format(email):
            errors['email'] = 'Invalid email format'
        else:
            cleaned_data['email'] = email

        # Password validation
        password = data.get('password') or ''
        if not password:
            errors['password'] = 'Password is required'
        else:
            cleaned_data['password'] = password

        is_valid = len(errors) == 0
        return is_valid, errors if not is_valid else None, cleaned_data if is_valid else None

    @staticmethod
    def validate_password_change(data: Dict[str, Any]) -> Tuple[bool, Optional[Dict[str, str]], Optional[Dict[str, Any]]]:
        """
        Validate password change data

        Args:
            data: Dictionary with currentPassword, newPassword, confirmPassword

        Returns:
            Tuple of (is_valid, errors, cleaned_data)
        """
        errors = {}
        cleaned_data = {}
        data = data or {}

        current_password = data.get('currentPassword') or ''
        if not current_password:
            errors['currentPassword'] = 'Current password is required'
        else:
            cleaned_data['current_password'] = current_password

        password = data.get('newPassword') or ''
        password_errors = AuthSchemas._new_password_errors(
            password, data.get('confirmPassword') or '', field='newPassword'
        )
        if password_errors:
            errors.update(password_errors)
        elif password == current_password:
            errors['newPassword'] = 'New password must be different from the current one'
        else:
            cleaned_data['new_password'] = password

        is_valid = len(errors) == 0
        return is_valid, errors if not is_valid else None, cleaned_data if is_valid else None

    @staticmethod
    def validate_password_reset_request(data: Dict[str, Any]) -> Tuple[bool, Optional[Dict[str, str]], Optional[Dict[str, Any]]]:
        """
        Validate password reset request data

        Args:
            data: Dictionary containing the account email

        Returns:
            Tuple of (is_valid, errors, cleaned_data)
        """
        errors = {}
        cleaned_data = {}
        data = data or {}

        email = str(data.get('email') or '').strip().lower()
        if not email:
            errors['email'] = 'Email is required'
        elif not AuthSchemas._validate_email_format(email):
            errors['email'] = 'Invalid email format'
        else:
            cleaned_data['email'] = email

        is_valid = len(errors) == 0
        return is_valid, errors if not is_valid else None, cleaned_data if is_valid else None

    @staticmethod
    def validate_password_reset_confirm(data: Dict[str, Any]) -> Tuple[bool, Optional[Dict[str, str]], Optional[Dict[str, Any]]]:
        """
        Validate password reset confirmation data

        Args:
            data: Dictionary with token, password and confirmPassword

        Returns:
            Tuple of (is_valid, errors, cleaned_data)
        """
        errors = {}
        cleaned_data = {}
        data = data or {}

        token = str(data.get('token') or '').strip()
        if not token:
            errors['token'] = 'Reset token is required'
        else:
            cleaned_data['token'] = token

        password = data.get('password') or ''
        password_errors = AuthSchemas._new_password_errors(
            password, data.get('confirmPassword') or '', field='password'
        )
        if password_errors:
            errors.update(password_errors)
        else:
            cleaned_data['password'] = password

        is_valid = len(errors) == 0
        return is_valid, errors if not is_valid else None, cleaned_data if is_valid else None

    @staticmethod
    def validate_profile_update(data: Dict[str, Any]) -> Tuple[bool, Optional[Dict[str, str]], Optional[Dict[str, Any]]]:
        """
        Validate a profile update

        Only ``name`` and ``phone`` can be changed here; email, role and
        status are managed elsewhere. An empty phone clears it.
        """
        errors = {}
        cleaned_data = {}
        data = data or {}

        if 'name' in data:
            name = str(data.get('name') or '').strip()
            if not 2 <= len(name) <= 100:
                errors['name'] = 'Name must be between 2 and 100 characters'
            else:
                cleaned_data['name'] = name

        if 'phone' in data:
            phone = str(data.get('phone') or '').strip()
            if phone and not AuthSchemas._validate_phone(phone):
                errors['phone'] = 'Invalid phone number format'
            else:
                cleaned_data['phone'] = phone or None

        if not errors and not cleaned_data:
            errors['profile'] = 'Nothing to update'

        is_valid = len(errors) == 0
        return is_valid, errors if not is_valid else None, cleaned_data if is_valid else None

    # Helper validation methods

    @staticmethod
    def _new_password_errors(password: str, confirm_password: str, field: str) -> Dict[str, str]:
        """Strength and confirmation errors for a new password, keyed by field name"""
        errors = {}
        if not password:
            errors[field] = 'New password is required' if field == 'newPassword' else 'Password is required'
        elif len(password) < 8:
            errors[field] = 'Password must be at least 8 characters'
        elif not AuthSchemas._validate_password_strength(password):
            errors[field] = 'Password must contain at least one letter and one number'

        if not confirm_password:
            errors['confirmPassword'] = 'Password confirmation is required'
        elif password != confirm_password:
            errors['confirmPassword'] = 'Passwords do not match'
        return errors

    @staticmethod
    def _validate_email_format(email: str) -> bool:
        """Validate email format using regex"""
        pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
        return re.match(pattern, email) is not None

    @staticmethod
    def _validate_password_strength(password: str) -> bool:
        """
        Validate password strength
        Must contain at least one letter and one number
        """
        has_letter = any(c.isalpha() for c in password)
        has_number = any(c.isdigit() for c in password)
        return has_letter and has_number

    @staticmethod
    def _validate_phone(phone: str) -> bool:
        """Validate phone number format"""
        cleaned = re.sub(r'[\s\-\(\)]', '', phone)
        digits = cleaned[1:] if cleaned.startswith('+') else cleaned
        return digits.isdigit() and 10 <= len(digits) <= 15
