"""
StockPro - Purchase Models
Compra com itens de stock (STOCK) e despesas livres (FREE)
"""
import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, Integer, Float, ForeignKey
from sqlalchemy.orm import relationship

from stockpro.database import Base


class PurchaseItemType(str, enum.Enum):
    """Tipo do item de compra"""
    STOCK = "STOCK"   # Produto do stock, incrementa quantidade
    FREE = "FREE"     # Despesa livre, apenas descricao


class Purchase(Base):
    """Modelo de compra"""
    __tablename__ = "purchases"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    user = relationship("User", lazy="selectin")

    total = Column(Float, nullable=False, default=0.0)
    notes = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    items = relationship(
        "PurchaseItem",
        back_populates="purchase",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="PurchaseItem.position"
    )

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "user_name": self.user.name if self.user else None,
            "total": self.total,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "items": [item.to_dict() for item in self.items],
        }


class PurchaseItem(Base):
    """Item de compra"""
    __tablename__ = "purchase_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    purchase_id = Column(String(36), ForeignKey("purchases.id", ondelete="CASCADE"), nullable=False, index=True)
    purchase = relationship("Purchase", back_populates="items")

    item_type = Column(String(10), nullable=False, default=PurchaseItemType.STOCK.value)

    # STOCK: product_id preenchido / FREE: description preenchida
    product_id = Column(String(36), ForeignKey("products.id"), nullable=True, index=True)
    product = relationship("Product", lazy="selectin")
    description = Column(String(255))

    position = Column(Integer, nullable=False, default=0)

    quantity = Column(Integer, nullable=False)
    unit_price = Column(Float, nullable=False)
    total = Column(Float, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "item_type": self.item_type,
            "product_id": self.product_id,
            "product_name": self.product.name if self.product else None,
            "description": self.description,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "total": self.total,
        }
