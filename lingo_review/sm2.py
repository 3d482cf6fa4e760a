from datetime import date, datetime, time, timedelta
from enum import Enum, IntEnum
from typing import Iterable, List, Union

from lingo_review.schemas import ReviewRecord

INITIAL_EASE = 2.5
MIN_EASE = 1.3


class InvalidQuality(ValueError):
    """Raised when a recall grade falls outside 0-5"""

    def __init__(self, quality):
        self.quality = quality
        super().__init__(f"quality must be an integer between 0 and 5, got {quality!r}")


class Quality(IntEnum):
    """Recall quality grades (0-5 scale)"""
    BLACKOUT = 0  # complete failure to recall
    INCORRECT = 1  # wrong, but remembered once the answer was shown
    INCORRECT_EASY = 2  # wrong, but the answer seemed easy afterwards
    HARD = 3  # correct with serious difficulty
    GOOD = 4  # correct after hesitation
    PERFECT = 5  # immediate and effortless


class ReviewState(str, Enum):
    NEW = "new"
    LEARNING = "learning"
    REVIEW = "review"
    LAPSED = "lapsed"


def ease_to_storage(ease_factor: float) -> int:
    """Ease factor as the integer x100 value kept in the database"""
    return int(round(ease_factor * 100))


def ease_from_storage(stored: int) -> float:
    return stored / 100


def as_instant(when: Union[date, datetime]) -> datetime:
    """A grading time; a plain date counts as the start of that day"""
    if isinstance(when, datetime):
        return when
    return datetime.combine(when, time.min)


class SM2Algorithm:
    """
    SM-2 spaced repetition algorithm for scheduling vocabulary reviews.
    Based on SuperMemo 2 algorithm by Piotr Wozniak.

    Every method is a pure function of its arguments: the caller supplies the
    current time and persists the returned record.
    """

    @staticmethod
    def validate_quality(quality) -> int:
        if isinstance(quality, bool) or not isinstance(quality, int):
            raise InvalidQuality(quality)
        if quality < 0 or quality > 5:
            raise InvalidQuality(quality)
        return int(quality)

    @staticmethod
    def next_ease(ease_factor: float, quality: int) -> float:
        """
        Apply the SM-2 ease update for one grade.

        Works in hundredths so that repeated updates stay exact:
        0.1 - d * (0.08 + d * 0.02) == (10 - d * (8 + 2 * d)) / 100
        """
        d = 5 - quality
        hundredths = ease_to_storage(ease_factor) + 10 - d * (8 + 2 * d)
        return ease_from_storage(max(ease_to_storage(MIN_EASE), hundredths))

    @staticmethod
    def grade(record: ReviewRecord, quality: int, now: Union[date, datetime]) -> ReviewRecord:
        """
        Grade one recall attempt and return the updated record.

        Args:
            record: Current scheduling state for the learner/item pair
            quality: Response quality (0-5). 0=total blackout, 5=perfect
            now: Instant of grading, supplied by the caller. A plain date
                grades at the start of that day

        Returns:
            New ReviewRecord; the input record is left as it was

        Raises:
            InvalidQuality: quality is not an integer in [0, 5]
        """
        quality = SM2Algorithm.validate_quality(quality)
        now = as_instant(now)

        # Update easiness factor based on quality
        new_ef = SM2Algorithm.next_ease(record.ease_factor, quality)

        # If quality < 3, reset repetitions (failed recall)
        if quality < 3:
            new_repetitions = 0
            new_interval = 1
        else:
            new_repetitions = record.repetitions + 1

            # Calculate new interval based on repetition count
            if new_repetitions == 1:
                new_interval = 1
            elif new_repetitions == 2:
                new_interval = 6
            else:
                # round half up on the previous interval times the new ease
                new_interval = (record.interval * ease_to_storage(new_ef) + 50) // 100

        return record.model_copy(update={
            "ease_factor": new_ef,
            "interval": new_interval,
            "repetitions": new_repetitions,
            "next_review_date": now.date() + timedelta(days=new_interval),
            "last_reviewed_at": now,
        })

    @staticmethod
    def due_items(records: Iterable[ReviewRecord], as_of: date) -> List[ReviewRecord]:
        """Records due on or before as_of, in input order"""
        return [record for record in records if record.next_review_date <= as_of]

    @staticmethod
    def new_record(learner_id: int, vocabulary_id: str, today: date) -> ReviewRecord:
        """Initial scheduling state for a pair that has never been graded"""
        return ReviewRecord(
            learner_id=learner_id,
            vocabulary_id=vocabulary_id,
            ease_factor=INITIAL_EASE,
            interval=0,
            repetitions=0,
            next_review_date=today,
            last_reviewed_at=None,
        )

    @staticmethod
    def review_state(record: ReviewRecord) -> ReviewState:
        if record.repetitions >= 3:
            return ReviewState.REVIEW
        if record.repetitions > 0:
            return ReviewState.LEARNING
        if record.last_reviewed_at is None:
            return ReviewState.NEW
        return ReviewState.LAPSED

    @staticmethod
    def get_days_overdue(record: ReviewRecord, as_of: date) -> int:
        """Calculate how many days overdue a review is"""
        if as_of < record.next_review_date:
            return 0
        return (as_of - record.next_review_date).days


grade = SM2Algorithm.grade
due_items = SM2Algorithm.due_items
new_record = SM2Algorithm.new_record
review_state = SM2Algorithm.review_state
