"""
StockPro - Order Models
Encomendas com itens do stock, dados do cliente e fotografias
"""
import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, Integer, Float, ForeignKey
from sqlalchemy.orm import relationship

from stockpro.database import Base


class OrderStatus(str, enum.Enum):
    """Status da encomenda"""
    PENDENTE = "PENDENTE"
    EM_ANDAMENTO = "EM_ANDAMENTO"
    COMPLETA = "COMPLETA"
    CONCLUIDA = "CONCLUIDA"     # Unico status que baixa o stock
    CANCELADA = "CANCELADA"


class Order(Base):
    """Modelo de encomenda"""
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    user = relationship("User", lazy="selectin")

    status = Column(String(20), nullable=False, default=OrderStatus.PENDENTE.value, index=True)
    total = Column(Float, nullable=False, default=0.0)
    notes = Column(Text)

    # Cliente
    client_name = Column(String(255))
    client_phone = Column(String(30))

    # Item personalizado (fora do stock)
    description = Column(Text)
    custom_quantity = Column(Integer)
    custom_unit_price = Column(Float)

    # Controle de concorrencia otimista (StaleDataError em gravacoes concorrentes)
    version = Column(Integer, nullable=False, default=1)
    __mapper_args__ = {"version_id_col": version}

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="OrderItem.position"
    )
    images = relationship(
        "OrderImage",
        back_populates="order",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="OrderImage.created_at"
    )

    @property
    def custom_total(self) -> float:
        if self.custom_quantity and self.custom_unit_price:
            return round(self.custom_quantity * self.custom_unit_price, 2)
        return 0.0

    def recalculate_total(self):
        self.total = round(sum(item.total for item in self.items) + self.custom_total, 2)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "user_name": self.user.name if self.user else None,
            "status": self.status,
            "total": self.total,
            "notes": self.notes,
            "client_name": self.client_name,
            "client_phone": self.client_phone,
            "description": self.description,
            "custom_quantity": self.custom_quantity,
            "custom_unit_price": self.custom_unit_price,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "items": [item.to_dict() for item in self.items],
            "images": [image.to_dict() for image in self.images],
        }


class OrderItem(Base):
    """Item de encomenda"""
    __tablename__ = "order_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    order = relationship("Order", back_populates="items")

    product_id = Column(String(36), ForeignKey("products.id"), nullable=False, index=True)
    product = relationship("Product", lazy="selectin")

    position = Column(Integer, nullable=False, default=0)

    quantity = Column(Integer, nullable=False)
    unit_price = Column(Float, nullable=False)
    total = Column(Float, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "product_id": self.product_id,
            "product_name": self.product.name if self.product else None,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "total": self.total,
        }


class OrderImage(Base):
    """Fotografia anexada a encomenda (apenas a URL publica)"""
    __tablename__ = "order_images"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    order = relationship("Order", back_populates="images")

    url = Column(String(500), nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "url": self.url,
        }
