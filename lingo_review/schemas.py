from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Literal, Optional
from datetime import date, datetime

class ReviewRecord(BaseModel):
    """SM-2 scheduling state for one (learner, vocabulary item) pair"""
    model_config = ConfigDict(frozen=True, from_attributes=True)

    learner_id: int
    vocabulary_id: str
    ease_factor: float = Field(default=2.5, ge=1.3)
    interval: int = Field(default=0, ge=0)  # days until next review
    repetitions: int = Field(default=0, ge=0)  # consecutive successful recalls
    next_review_date: date
    last_reviewed_at: Optional[datetime] = None

    @field_validator("ease_factor")
    @classmethod
    def ease_in_hundredths(cls, v: float) -> float:
        # stored as an integer number of hundredths
        if abs(v * 100 - round(v * 100)) > 1e-6:
            raise ValueError(f"ease_factor must be a whole number of hundredths, got {v!r}")
        return v

class LearnerCreate(BaseModel):
    """Schema for creating a learner"""
    username: str
    email: str
    role: str = "student"

class ScenarioCreate(BaseModel):
    """Schema for a life-skills scenario"""
    id: str
    title: str
    description: str = ""
    icon: str = ""
    image_url: str = ""
    language: str

class VocabularyItemCreate(BaseModel):
    """Schema for a vocabulary word or phrase"""
    id: str
    scenario_id: str
    word: str
    translation: str
    pronunciation: str = ""
    example_sentence: str = ""
    example_translation: str = ""
    image_url: Optional[str] = None
    difficulty: Literal["beginner", "intermediate", "advanced"] = "beginner"
    language: str

class QuizSubmit(BaseModel):
    """Schema for a finished scenario quiz"""
    scenario_id: str
    difficulty: str
    score: int = Field(ge=0)
    total_questions: int = Field(gt=0)
