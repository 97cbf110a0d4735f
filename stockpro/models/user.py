"""
StockPro - User Model
Usuarios do sistema (ADMIN, GERENTE, FUNCIONARIO)
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime

from stockpro.database import Base
from stockpro.core.rbac import Role, Caller


class User(Base):
    """Modelo de usuario"""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=Role.FUNCIONARIO.value)

    active = Column(Boolean, default=True, nullable=False)

    last_login_at = Column(DateTime)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_caller(self) -> Caller:
        return Caller(user_id=self.id, role=Role(self.role), name=self.name)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "active": self.active,
            "last_login_at": self.last_login_at.isoformat() if self.last_login_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
