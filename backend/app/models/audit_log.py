"""
Audit log of administrative actions.
"""
from sqlalchemy import Column, String, ForeignKey, Integer, JSON
from app.db.base import BaseModel


class AuditLog(BaseModel):
    """One row per admin action on an entity."""
    __tablename__ = "audit_logs"

    entity_type = Column(String(50), nullable=False, index=True)
    entity_id = Column(Integer, nullable=True)
    action = Column(String(50), nullable=False)
    performed_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    payload = Column(JSON, nullable=True)
