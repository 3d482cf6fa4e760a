from sqlalchemy import Column, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from lingo_review.database import Base

class Scenario(Base):
    """Life-skills scenario grouping vocabulary (e.g. ordering at a cafe)"""
    __tablename__ = "scenarios"
    
    id = Column(String(100), primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    icon = Column(String(100), nullable=False, default="")
    image_url = Column(Text, nullable=False, default="")
    language = Column(String(50), nullable=False, index=True)
    
    vocabulary = relationship("VocabularyItem", back_populates="scenario")

class VocabularyItem(Base):
    """Word or phrase with translation and example usage"""
    __tablename__ = "vocabulary_items"
    
    id = Column(String(100), primary_key=True)
    scenario_id = Column(String(100), ForeignKey("scenarios.id"), nullable=False)
    word = Column(String(255), nullable=False)
    translation = Column(String(255), nullable=False)
    pronunciation = Column(String(255), nullable=False, default="")
    example_sentence = Column(Text, nullable=False, default="")
    example_translation = Column(Text, nullable=False, default="")
    image_url = Column(Text)
    difficulty = Column(String(20), nullable=False)  # beginner, intermediate, advanced
    language = Column(String(50), nullable=False, index=True)
    
    scenario = relationship("Scenario", back_populates="vocabulary")
