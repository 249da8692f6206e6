from flask import current_app


class EmailService:
    """Email sending utilities (integrate with SendGrid, AWS SES, etc.)"""

    @staticmethod
    def send_email(to: str, subject: str, body: str):
        """Send email (placeholder, logs the recipient and subject only)"""
        # TODO: Integrate with an SMTP relay or a transactional email provider
        current_app.logger.info(f"Email sent to {to}: {subject}")
        return True

    @staticmethod
    def send_password_reset_email(user, reset_url):
        """Send the password reset link"""
        body = f"""
        Hello {user.name},

        You requested to reset your password. Click the link below to reset it:
        {reset_url}

        This link will expire in {current_app.config['PASSWORD_RESET_MAX_AGE'] // 60} minutes.

        If you didn't request this, please ignore this email.
        """
        return EmailService.send_email(to=user.email, subject='Gym Portal - Password Reset Request', body=body)
