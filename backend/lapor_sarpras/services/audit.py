from typing import List, Optional

from sqlalchemy.orm import Session

from lapor_sarpras.models.audit_log import AuditLog


def add_audit_log(
    db: Session,
    *,
    action: str,
    entity: str,
    entity_id: int,
    actor: str,
    summary: Optional[str] = None,
    ip: Optional[str] = None,
) -> AuditLog:
    # caller commits, so the log lands in the same transaction as the change
    log = AuditLog(
        action=action,
        entity=entity,
        entity_id=entity_id,
        summary=summary[:255] if summary else None,
        actor=actor,
        ip=ip,
    )
    db.add(log)
    return log


def list_audit_logs(
    db: Session,
    *,
    entity: Optional[str] = None,
    entity_id: Optional[int] = None,
    limit: int = 50,
) -> List[AuditLog]:
    limit = max(1, min(limit, 200))

    q = db.query(AuditLog).order_by(AuditLog.id.desc())

    if entity is not None:
        q = q.filter(AuditLog.entity == entity)
    if entity_id is not None:
        q = q.filter(AuditLog.entity_id == entity_id)

    return q.limit(limit).all()
