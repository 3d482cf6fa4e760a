from sqlalchemy.orm import Session
from lingo_review.models import Learner, LearnerProgress, ReviewSchedule
from lingo_review.schemas import LearnerCreate
from lingo_review.logging_config import get_logger
from typing import Optional

logger = get_logger(__name__)

def create_learner(db: Session, learner: LearnerCreate) -> Learner:
    """Create a new learner"""
    db_learner = Learner(**learner.model_dump())
    db.add(db_learner)
    db.commit()
    db.refresh(db_learner)
    logger.info("learner_created", learner_id=db_learner.id, username=db_learner.username)
    return db_learner

def get_learner(db: Session, learner_id: int) -> Optional[Learner]:
    """Get learner by ID"""
    return db.query(Learner).filter(Learner.id == learner_id).first()

def get_learner_by_username(db: Session, username: str) -> Optional[Learner]:
    return db.query(Learner).filter(Learner.username == username).first()

def delete_learner(db: Session, learner_id: int) -> bool:
    """Delete a learner together with their review schedule and progress"""
    db_learner = get_learner(db, learner_id)
    if not db_learner:
        return False
    removed = db.query(ReviewSchedule).filter(
        ReviewSchedule.learner_id == learner_id
    ).delete(synchronize_session=False)
    db.query(LearnerProgress).filter(
        LearnerProgress.learner_id == learner_id
    ).delete(synchronize_session=False)
    db.delete(db_learner)
    db.commit()
    logger.info("learner_deleted", learner_id=learner_id, reviews_removed=removed)
    return True
