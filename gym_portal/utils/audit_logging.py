from flask import current_app, has_request_context, request
from sqlalchemy.exc import SQLAlchemyError

from gym_portal.extensions import db


def request_metadata():
    """Remote address and user agent of the current request, if any"""
    if not has_request_context():
        return {}
    return {
        'ip': request.remote_addr,
        'user_agent': request.headers.get('User-Agent')
    }


class AuditLogger:
    """Log important actions for audit trail"""

    @staticmethod
    def log_action(
        user_id: str,
        action: str,
        entity_type: str = None,
        entity_id: str = None,
        description: str = None,
        changes: dict = None,
        ip_address: str = None,
        user_agent: str = None
    ):
        """Log an action to audit trail"""
        from gym_portal.models import AuditLog

        log = AuditLog(
            user_id=user_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            description=description,
            changes=changes,
            ip_address=ip_address,
            user_agent=user_agent
        )

        db.session.add(log)
        db.session.commit()
        return log

    @staticmethod
    def log_security(event: str, **data):
        """Record a security-relevant event.

        Always written to the application log at WARNING. When
        ``AUDIT_SECURITY_EVENTS`` is set the event is also stored in the
        audit trail; a failing write is logged and otherwise ignored so the
        response to the caller does not depend on it.
        """
        payload = request_metadata()
        payload.update(data)

        current_app.logger.warning(
            "Security event: %s %s", event, payload,
            extra={'security_event': event, 'security_data': payload}
        )

        if not current_app.config.get('AUDIT_SECURITY_EVENTS'):
            return

        try:
            AuditLogger.log_action(
                user_id=payload.get('user_id'),
                action=f'security:{event}',
                entity_type=payload.get('resource_type'),
                entity_id=payload.get('resource_id'),
                description=payload.get('reason'),
                changes={k: v for k, v in payload.items() if k not in ('ip', 'user_agent')},
                ip_address=payload.get('ip'),
                user_agent=payload.get('user_agent')
            )
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.error(f"Failed to store security event {event}: {str(e)}")
