# Export all admissions models for easy imports
from .base import Base
from .chat import ChatExchange, FaqEntry, RecommendationRecord

__all__ = [
    "Base",
    "ChatExchange",
    "FaqEntry",
    "RecommendationRecord",
]
