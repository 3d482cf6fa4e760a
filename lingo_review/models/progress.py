from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from lingo_review.database import Base

class LearnerProgress(Base):
    """Per-language streak, completed scenarios and mastered words"""
    __tablename__ = "learner_progress"
    __table_args__ = (
        UniqueConstraint("learner_id", "language", name="uq_progress_learner_language"),
    )
    
    id = Column(Integer, primary_key=True, index=True)
    learner_id = Column(Integer, ForeignKey("learners.id"), nullable=False)
    language = Column(String(50), nullable=False)
    completed_scenarios = Column(JSON, nullable=False, default=list)
    mastered_words = Column(JSON, nullable=False, default=list)
    current_streak = Column(Integer, nullable=False, default=0)
    last_study_date = Column(Date)
    total_words_learned = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    learner = relationship("Learner", back_populates="progress")
