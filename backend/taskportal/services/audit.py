from sqlalchemy.orm import Session

from taskportal.core.security import SessionClaims
from taskportal.models.audit_log import AuditLog


def log_event(
    s: Session,
    actor: SessionClaims,
    action: str,
    entity_type: str,
    entity_id: int | None = None,
    details: dict | None = None,
):
    """Queue an audit row in the caller's transaction.

    The row is committed together with the change it describes.
    """
    row = AuditLog(
        actor_id=actor.user_id,
        username=actor.username,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        details=details,
    )
    s.add(row)
    return row
