"""
StockPro - Note Model
Anotacoes livres, opcionalmente ligadas a uma encomenda
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship

from stockpro.database import Base


class Note(Base):
    """Modelo de anotacao"""
    __tablename__ = "notes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    user = relationship("User", lazy="selectin")

    # Referencia fraca: a encomenda pode ser apagada sem apagar a nota
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="SET NULL"), nullable=True, index=True)
    order = relationship("Order", lazy="selectin")

    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "user_name": self.user.name if self.user else None,
            "order_id": self.order_id,
            "order_status": self.order.status if self.order else None,
            "title": self.title,
            "content": self.content,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
