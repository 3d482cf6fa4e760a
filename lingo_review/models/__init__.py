from lingo_review.models.learner import Learner
from lingo_review.models.catalog import Scenario, VocabularyItem
from lingo_review.models.review_schedule import ReviewSchedule
from lingo_review.models.progress import LearnerProgress

__all__ = [
    "Learner",
    "Scenario",
    "VocabularyItem",
    "ReviewSchedule",
    "LearnerProgress"
]
