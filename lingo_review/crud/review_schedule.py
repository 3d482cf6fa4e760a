from sqlalchemy import select
from sqlalchemy.orm import Session
from lingo_review.models import Learner, ReviewSchedule, VocabularyItem
from lingo_review.schemas import ReviewRecord
from lingo_review.sm2 import SM2Algorithm, as_instant, ease_from_storage, ease_to_storage
from lingo_review.crud.progress import apply_review
from lingo_review.logging_config import get_logger
from datetime import date, datetime
from typing import List, Optional, Union

logger = get_logger(__name__)

def _to_record(row: ReviewSchedule) -> ReviewRecord:
    return ReviewRecord(
        learner_id=row.learner_id,
        vocabulary_id=row.vocabulary_id,
        ease_factor=ease_from_storage(row.ease_factor),
        interval=row.interval,
        repetitions=row.repetitions,
        next_review_date=row.next_review_date,
        last_reviewed_at=row.last_reviewed_at
    )

def _get_row(db: Session, learner_id: int, vocabulary_id: str) -> Optional[ReviewSchedule]:
    return db.query(ReviewSchedule).filter(
        ReviewSchedule.learner_id == learner_id,
        ReviewSchedule.vocabulary_id == vocabulary_id
    ).first()

def _write_row(db: Session, record: ReviewRecord) -> ReviewSchedule:
    """Insert or update the row for the record's pair (no commit)"""
    row = _get_row(db, record.learner_id, record.vocabulary_id)
    if not row:
        row = ReviewSchedule(learner_id=record.learner_id, vocabulary_id=record.vocabulary_id)
        db.add(row)
    row.ease_factor = ease_to_storage(record.ease_factor)
    row.interval = record.interval
    row.repetitions = record.repetitions
    row.next_review_date = record.next_review_date
    row.last_reviewed_at = record.last_reviewed_at
    db.flush()
    return row

def get_review(db: Session, learner_id: int, vocabulary_id: str) -> Optional[ReviewRecord]:
    """Get the review record for a learner/item pair"""
    row = _get_row(db, learner_id, vocabulary_id)
    return _to_record(row) if row else None

def get_or_create_review(db: Session, learner_id: int, vocabulary_id: str, today: date) -> ReviewRecord:
    """Look up the pair's review record, creating it with initial SM-2 values if new"""
    record = get_review(db, learner_id, vocabulary_id)
    if record:
        return record
    
    record = SM2Algorithm.new_record(learner_id, vocabulary_id, today)
    _write_row(db, record)
    db.commit()
    logger.info("review_created", learner_id=learner_id, vocabulary_id=vocabulary_id)
    return record

def save_review(db: Session, record: ReviewRecord) -> ReviewRecord:
    """Persist a review record returned by the scheduler"""
    _write_row(db, record)
    db.commit()
    return record

def grade_vocabulary(
    db: Session,
    learner_id: int,
    vocabulary_id: str,
    quality: int,
    now: Union[date, datetime]
) -> ReviewRecord:
    """
    Grade a recall attempt and persist the new schedule.
    
    Args:
        learner_id: Learner who made the attempt
        vocabulary_id: Vocabulary item that was recalled
        quality: Recall quality (0-5)
        now: Time of the attempt (a plain date means the start of that day)
    
    Returns:
        The updated review record
    
    Raises:
        InvalidQuality: quality outside 0-5 (nothing is written)
        LookupError: unknown learner or vocabulary item
    """
    # Reject bad grades before anything touches the session
    SM2Algorithm.validate_quality(quality)
    now = as_instant(now)
    
    if not db.query(Learner).filter(Learner.id == learner_id).first():
        raise LookupError(f"learner {learner_id} not found")
    item = db.query(VocabularyItem).filter(VocabularyItem.id == vocabulary_id).first()
    if not item:
        raise LookupError(f"vocabulary item {vocabulary_id!r} not found")
    
    current = get_review(db, learner_id, vocabulary_id)
    if current is None:
        current = SM2Algorithm.new_record(learner_id, vocabulary_id, now.date())
    
    updated = SM2Algorithm.grade(current, quality, now)
    _write_row(db, updated)
    apply_review(db, updated, item.language, now.date())
    db.commit()
    
    logger.info(
        "review_graded",
        learner_id=learner_id,
        vocabulary_id=vocabulary_id,
        quality=int(quality),
        repetitions=updated.repetitions,
        interval=updated.interval,
        ease_factor=updated.ease_factor,
        next_review_date=updated.next_review_date.isoformat()
    )
    return updated

def get_learner_reviews(db: Session, learner_id: int) -> List[ReviewRecord]:
    """All review records of a learner, soonest first"""
    rows = db.query(ReviewSchedule).filter(
        ReviewSchedule.learner_id == learner_id
    ).order_by(ReviewSchedule.next_review_date, ReviewSchedule.id).all()
    return [_to_record(row) for row in rows]

def get_due_reviews(
    db: Session,
    learner_id: int,
    as_of: date,
    language: Optional[str] = None,
    limit: Optional[int] = None
) -> List[ReviewRecord]:
    """Review records due on or before as_of, soonest first"""
    if limit is not None and limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")
    query = db.query(ReviewSchedule).filter(ReviewSchedule.learner_id == learner_id)
    if language:
        query = query.join(
            VocabularyItem, VocabularyItem.id == ReviewSchedule.vocabulary_id
        ).filter(VocabularyItem.language == language)
    rows = query.order_by(ReviewSchedule.next_review_date, ReviewSchedule.id).all()
    
    due = SM2Algorithm.due_items([_to_record(row) for row in rows], as_of)
    return due[:limit] if limit is not None else due

def prune_orphaned_reviews(db: Session) -> int:
    """Delete review records whose learner or vocabulary item no longer exists"""
    learner_ids = select(Learner.id)
    vocabulary_ids = select(VocabularyItem.id)
    removed = db.query(ReviewSchedule).filter(
        ReviewSchedule.learner_id.not_in(learner_ids) | ReviewSchedule.vocabulary_id.not_in(vocabulary_ids)
    ).delete(synchronize_session=False)
    db.commit()
    logger.info("orphaned_reviews_pruned", removed=removed)
    return removed
