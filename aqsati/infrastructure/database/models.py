"""SQLAlchemy ORM models for clients and their payments"""

import uuid
from sqlalchemy import Column, Text, Integer, Numeric, Date, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class ClientRecord(Base):
    """Client contract owned by a user account"""

    __tablename__ = "client"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(Text, nullable=False, index=True)
    name = Column(Text, nullable=False)
    phone = Column(Text, nullable=False)
    total = Column(Numeric(14, 2, asdecimal=False), nullable=False)
    months = Column(Integer, nullable=False)
    start_date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    installments = relationship(
        "InstallmentRecord",
        back_populates="client",
        cascade="all, delete-orphan",
    )


class InstallmentRecord(Base):
    """Payment received from a client"""

    __tablename__ = "installment"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    client_id = Column(UUID(as_uuid=True), ForeignKey("client.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(14, 2, asdecimal=False), nullable=False)
    date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    client = relationship("ClientRecord", back_populates="installments")
