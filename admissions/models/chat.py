from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, JSON, String, Text

from .base import Base


class ChatExchange(Base):
    __tablename__ = "chat_history"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(128), index=True)
    sender = Column(String(128))
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    path = Column(String(32))
    timestamp = Column(DateTime(timezone=False), default=datetime.utcnow, nullable=False)


class FaqEntry(Base):
    __tablename__ = "faqs"

    id = Column(Integer, primary_key=True)
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    frequency = Column(Integer, default=1, nullable=False)
    timestamp = Column(DateTime(timezone=False), default=datetime.utcnow, nullable=False)


class RecommendationRecord(Base):
    __tablename__ = "recommendations"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(128), index=True)
    grades = Column(JSON)
    aggregate = Column(Integer)
    recommendations = Column(JSON)
    timestamp = Column(DateTime(timezone=False), default=datetime.utcnow, nullable=False)
