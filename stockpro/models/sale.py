"""
StockPro - Sale Models
Venda (cabecalho) e itens com copia do preco de custo
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, Integer, Float, ForeignKey
from sqlalchemy.orm import relationship

from stockpro.database import Base


class Sale(Base):
    """Modelo de venda"""
    __tablename__ = "sales"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    user = relationship("User", lazy="selectin")

    total = Column(Float, nullable=False, default=0.0)
    profit = Column(Float, nullable=False, default=0.0)
    notes = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    items = relationship(
        "SaleItem",
        back_populates="sale",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="SaleItem.position"
    )

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "user_name": self.user.name if self.user else None,
            "total": self.total,
            "profit": self.profit,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "items": [item.to_dict() for item in self.items],
        }


class SaleItem(Base):
    """Item de venda"""
    __tablename__ = "sale_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    sale_id = Column(String(36), ForeignKey("sales.id", ondelete="CASCADE"), nullable=False, index=True)
    sale = relationship("Sale", back_populates="items")

    product_id = Column(String(36), ForeignKey("products.id"), nullable=False, index=True)
    product = relationship("Product", lazy="selectin")

    # Ordem em que a linha foi submetida
    position = Column(Integer, nullable=False, default=0)

    quantity = Column(Integer, nullable=False)
    unit_price = Column(Float, nullable=False)
    # Preco de custo no momento da venda (nao acompanha alteracoes do produto)
    buy_price = Column(Float, nullable=False)
    total = Column(Float, nullable=False)
    profit = Column(Float, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "product_id": self.product_id,
            "product_name": self.product.name if self.product else None,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "buy_price": self.buy_price,
            "total": self.total,
            "profit": self.profit,
        }
