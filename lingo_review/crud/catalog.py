from sqlalchemy.orm import Session
from lingo_review.models import Scenario, VocabularyItem, ReviewSchedule
from lingo_review.schemas import ScenarioCreate, VocabularyItemCreate
from lingo_review.logging_config import get_logger
from typing import Dict, Iterable, List, Optional

logger = get_logger(__name__)

def create_scenario(db: Session, scenario: ScenarioCreate) -> Scenario:
    """Create scenario record"""
    db_scenario = Scenario(**scenario.model_dump())
    db.add(db_scenario)
    db.commit()
    db.refresh(db_scenario)
    return db_scenario

def get_scenario(db: Session, scenario_id: str) -> Optional[Scenario]:
    return db.query(Scenario).filter(Scenario.id == scenario_id).first()

def list_scenarios(db: Session, language: str) -> List[Scenario]:
    """All scenarios available in a language"""
    return db.query(Scenario).filter(
        Scenario.language == language
    ).order_by(Scenario.id).all()

def add_vocabulary_items(db: Session, items: List[VocabularyItemCreate]) -> int:
    """
    Add vocabulary items to the catalog.
    
    Items whose id already exists are updated in place so re-importing a
    sheet does not fail.
    
    Returns:
        Number of items added or updated
    """
    count = 0
    for item in items:
        existing = get_vocabulary_item(db, item.id)
        if existing:
            for key, value in item.model_dump().items():
                setattr(existing, key, value)
        else:
            db.add(VocabularyItem(**item.model_dump()))
        count += 1
    
    db.commit()
    logger.info("vocabulary_items_saved", count=count)
    return count

def get_vocabulary_item(db: Session, vocabulary_id: str) -> Optional[VocabularyItem]:
    return db.query(VocabularyItem).filter(VocabularyItem.id == vocabulary_id).first()

def get_vocabulary_items(db: Session, vocabulary_ids: Iterable[str]) -> Dict[str, VocabularyItem]:
    """Catalog items for the given ids in one query, keyed by id; unknown ids are left out"""
    ids = set(vocabulary_ids)
    if not ids:
        return {}
    items = db.query(VocabularyItem).filter(VocabularyItem.id.in_(ids)).all()
    return {item.id: item for item in items}

def list_scenario_vocabulary(db: Session, scenario_id: str) -> List[VocabularyItem]:
    """Vocabulary of a scenario, in id order"""
    return db.query(VocabularyItem).filter(
        VocabularyItem.scenario_id == scenario_id
    ).order_by(VocabularyItem.id).all()

def delete_vocabulary_item(db: Session, vocabulary_id: str) -> bool:
    """Remove an item from the catalog along with its review records"""
    item = get_vocabulary_item(db, vocabulary_id)
    if not item:
        return False
    db.query(ReviewSchedule).filter(
        ReviewSchedule.vocabulary_id == vocabulary_id
    ).delete(synchronize_session=False)
    db.delete(item)
    db.commit()
    return True
