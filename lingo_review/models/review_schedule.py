from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from lingo_review.database import Base

class ReviewSchedule(Base):
    """SM-2 spaced repetition state per learner and vocabulary item"""
    __tablename__ = "review_schedule"
    __table_args__ = (
        UniqueConstraint("learner_id", "vocabulary_id", name="uq_review_learner_vocabulary"),
    )
    
    id = Column(Integer, primary_key=True, index=True)
    learner_id = Column(Integer, ForeignKey("learners.id"), nullable=False)
    vocabulary_id = Column(String(100), ForeignKey("vocabulary_items.id"), nullable=False)
    
    # SM-2 algorithm fields
    ease_factor = Column(Integer, nullable=False, default=250)  # EF x 100
    interval = Column(Integer, nullable=False, default=0)  # days until next review
    repetitions = Column(Integer, nullable=False, default=0)  # consecutive successful reviews
    
    next_review_date = Column(Date, nullable=False, index=True)
    last_reviewed_at = Column(DateTime)
    
    learner = relationship("Learner", back_populates="reviews")
    vocabulary_item = relationship("VocabularyItem")
