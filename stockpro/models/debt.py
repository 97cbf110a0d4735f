"""
StockPro - Debt Models
Dividas de clientes e pagamentos parciais
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, Integer, Float, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from stockpro.database import Base


class Debt(Base):
    """
    Modelo de divida.
    remaining = total_amount - paid_amount, nunca negativo.
    """
    __tablename__ = "debts"
    __table_args__ = (
        CheckConstraint("remaining >= 0", name="ck_debts_remaining_non_negative"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    client_name = Column(String(255), nullable=False, index=True)
    total_amount = Column(Float, nullable=False)
    paid_amount = Column(Float, nullable=False, default=0.0)
    remaining = Column(Float, nullable=False)
    description = Column(Text)

    # Controle de concorrencia otimista entre pagamentos simultaneos
    version = Column(Integer, nullable=False, default=1)
    __mapper_args__ = {"version_id_col": version}

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    payments = relationship(
        "Payment",
        back_populates="debt",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="Payment.created_at.desc()"
    )

    @property
    def is_paid(self) -> bool:
        return round(self.remaining, 2) == 0

    def to_dict(self, include_payments: bool = True):
        data = {
            "id": self.id,
            "client_name": self.client_name,
            "total_amount": self.total_amount,
            "paid_amount": self.paid_amount,
            "remaining": self.remaining,
            "is_paid": self.is_paid,
            "description": self.description,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        if include_payments:
            data["payments"] = [p.to_dict() for p in self.payments]
        return data


class Payment(Base):
    """Pagamento aplicado a uma divida"""
    __tablename__ = "payments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    debt_id = Column(String(36), ForeignKey("debts.id", ondelete="CASCADE"), nullable=False, index=True)
    debt = relationship("Debt", back_populates="payments")

    amount = Column(Float, nullable=False)
    notes = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "debt_id": self.debt_id,
            "amount": self.amount,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
