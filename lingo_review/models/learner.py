from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from lingo_review.database import Base

class Learner(Base):
    """A learner account (credentials live with the auth service)"""
    __tablename__ = "learners"
    
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True)
    role = Column(String(50), nullable=False, default="student")
    created_at = Column(DateTime, default=datetime.utcnow)
    
    reviews = relationship("ReviewSchedule", back_populates="learner")
    progress = relationship("LearnerProgress", back_populates="learner")
