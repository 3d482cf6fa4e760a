from sqlalchemy.orm import Session
from lingo_review.models import LearnerProgress
from lingo_review.schemas import QuizSubmit, ReviewRecord
from lingo_review.sm2 import ReviewState, review_state
from lingo_review.config import settings
from lingo_review.logging_config import get_logger
from datetime import date, timedelta

logger = get_logger(__name__)

def get_progress(db: Session, learner_id: int, language: str) -> LearnerProgress:
    """Get progress for a learner and language, creating an empty row if needed"""
    progress = db.query(LearnerProgress).filter(
        LearnerProgress.learner_id == learner_id,
        LearnerProgress.language == language
    ).first()
    if not progress:
        progress = LearnerProgress(
            learner_id=learner_id,
            language=language,
            completed_scenarios=[],
            mastered_words=[],
            current_streak=0,
            last_study_date=None,
            total_words_learned=0
        )
        db.add(progress)
        db.flush()
    return progress

def record_study_day(progress: LearnerProgress, today: date) -> LearnerProgress:
    """
    Update the daily streak for a study event on `today`.
    
    Studied yesterday -> streak continues; already studied today -> unchanged;
    any longer gap (or first study) -> streak restarts at 1.
    """
    if progress.last_study_date == today - timedelta(days=1):
        progress.current_streak += 1
    elif progress.last_study_date != today:
        progress.current_streak = 1
    progress.last_study_date = today
    return progress

def apply_review(db: Session, record: ReviewRecord, language: str, today: date) -> LearnerProgress:
    """Sync mastered words and streak with a freshly graded review record"""
    progress = get_progress(db, record.learner_id, language)
    mastered = list(progress.mastered_words or [])
    
    if review_state(record) == ReviewState.REVIEW:
        if record.vocabulary_id not in mastered:
            mastered.append(record.vocabulary_id)
    elif record.vocabulary_id in mastered:
        # Lapsed - no longer mastered
        mastered.remove(record.vocabulary_id)
    
    # JSON columns need a new list to register as changed
    progress.mastered_words = mastered
    progress.total_words_learned = len(mastered)
    record_study_day(progress, today)
    return progress

def submit_quiz(db: Session, learner_id: int, language: str, result: QuizSubmit, today: date) -> LearnerProgress:
    """Record a finished quiz: complete the scenario on a passing score and update the streak"""
    progress = get_progress(db, learner_id, language)
    completed = list(progress.completed_scenarios or [])
    
    passed = result.score >= result.total_questions * settings.quiz_pass_ratio
    if passed and result.scenario_id not in completed:
        completed.append(result.scenario_id)
        progress.completed_scenarios = completed
    
    record_study_day(progress, today)
    db.commit()
    db.refresh(progress)
    logger.info(
        "quiz_submitted",
        learner_id=learner_id,
        scenario_id=result.scenario_id,
        score=result.score,
        total_questions=result.total_questions,
        passed=passed,
        streak=progress.current_streak
    )
    return progress
