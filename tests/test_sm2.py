from datetime import date, datetime, timedelta

import pytest
from pydantic import ValidationError

from lingo_review.schemas import ReviewRecord
from lingo_review.sm2 import (
    InvalidQuality,
    Quality,
    ReviewState,
    SM2Algorithm,
    due_items,
    ease_from_storage,
    ease_to_storage,
    grade,
    new_record,
    review_state,
)

DAY0 = datetime(2026, 3, 2, 9, 30)


def make_record(**overrides):
    values = dict(
        learner_id=1,
        vocabulary_id="cafe-1",
        ease_factor=2.5,
        interval=0,
        repetitions=0,
        next_review_date=DAY0.date(),
    )
    values.update(overrides)
    return ReviewRecord(**values)


def test_new_record_defaults():
    record = new_record(7, "gare-1", date(2026, 3, 2))

    assert record.learner_id == 7
    assert record.vocabulary_id == "gare-1"
    assert record.ease_factor == 2.5
    assert record.interval == 0
    assert record.repetitions == 0
    assert record.next_review_date == date(2026, 3, 2)
    assert record.last_reviewed_at is None


@pytest.mark.parametrize("quality, expected_ease", [
    (5, 2.6),
    (4, 2.5),
    (3, 2.36),
    (2, 2.18),
    (1, 1.96),
    (0, 1.7),
])
def test_ease_update_per_quality(quality, expected_ease):
    assert grade(make_record(), quality, DAY0).ease_factor == expected_ease


@pytest.mark.parametrize("start_ease", [1.3, 1.31, 1.45, 2.0, 2.5, 3.7])
@pytest.mark.parametrize("quality", range(6))
def test_ease_never_drops_below_floor(start_ease, quality):
    result = grade(make_record(ease_factor=start_ease), quality, DAY0)
    assert result.ease_factor >= 1.3


def test_repeated_blackouts_stay_on_floor():
    record = make_record()
    eases = []
    for day in range(4):
        record = grade(record, Quality.BLACKOUT, DAY0 + timedelta(days=day))
        eases.append(record.ease_factor)

    assert eases == [1.7, 1.3, 1.3, 1.3]


@pytest.mark.parametrize("repetitions, interval", [(0, 0), (1, 1), (2, 6), (9, 120)])
def test_failure_resets_repetitions_and_interval(repetitions, interval):
    record = make_record(repetitions=repetitions, interval=interval, ease_factor=2.1)
    result = grade(record, 2, DAY0)

    assert result.repetitions == 0
    assert result.interval == 1
    assert result.next_review_date == DAY0.date() + timedelta(days=1)
    # failure still degrades ease
    assert result.ease_factor == pytest.approx(1.78)


def test_three_good_recalls_grow_interval():
    first = grade(make_record(), 4, DAY0)
    second = grade(first, 4, DAY0 + timedelta(days=1))
    third = grade(second, 4, DAY0 + timedelta(days=7))

    assert (first.repetitions, first.interval) == (1, 1)
    assert (second.repetitions, second.interval) == (2, 6)
    assert third.repetitions == 3
    assert third.interval == round(6 * second.ease_factor)
    assert third.interval == 15


def test_third_interval_uses_updated_ease():
    # 6 * 2.6 = 15.6, not 6 * 2.5 = 15
    result = grade(make_record(repetitions=2, interval=6), Quality.PERFECT, DAY0)
    assert result.ease_factor == 2.6
    assert result.interval == 16


def test_interval_rounds_half_up():
    # 5 * 2.5 = 12.5
    result = grade(make_record(repetitions=2, interval=5), Quality.GOOD, DAY0)
    assert result.interval == 13


def test_interval_compounds_from_previous_interval():
    # ease 2.36 -> 2.22 for quality 3; 6 * 2.22 = 13.32
    result = grade(make_record(repetitions=2, interval=6, ease_factor=2.36), Quality.HARD, DAY0)
    assert result.ease_factor == 2.22
    assert result.interval == 13


def test_grading_is_not_idempotent():
    record = make_record()
    once = grade(record, 4, DAY0)
    twice = grade(once, 4, DAY0)

    assert once.repetitions == 1
    assert twice.repetitions == 2
    assert twice.interval == 6


def test_grade_sets_review_timestamps():
    late = datetime(2026, 3, 2, 23, 59, 59)
    result = grade(make_record(), 5, late)

    assert result.last_reviewed_at == late
    assert result.next_review_date == date(2026, 3, 3)


def test_grade_accepts_plain_date():
    result = grade(make_record(), 4, date(2026, 3, 2))

    assert result.next_review_date == date(2026, 3, 3)
    assert result.last_reviewed_at == datetime(2026, 3, 2, 0, 0)


def test_whole_day_schedule():
    record = grade(make_record(), 5, date(2026, 3, 2))
    record = grade(record, 5, date(2026, 3, 3))
    assert record.next_review_date == date(2026, 3, 9)

    record = grade(record, 4, date(2026, 3, 9))
    assert (record.repetitions, record.interval) == (3, 16)
    assert record.next_review_date == date(2026, 3, 25)


def test_grade_keeps_identity():
    result = grade(make_record(learner_id=42, vocabulary_id="gare-1"), 3, DAY0)
    assert result.learner_id == 42
    assert result.vocabulary_id == "gare-1"


@pytest.mark.parametrize("quality", [-1, 6, 4.0, True, "4", None])
def test_invalid_quality_rejected(quality):
    record = make_record(repetitions=2, interval=6)
    snapshot = record.model_copy()

    with pytest.raises(InvalidQuality) as excinfo:
        grade(record, quality, DAY0)

    assert excinfo.value.quality == quality
    assert record == snapshot


def test_invalid_quality_is_value_error():
    with pytest.raises(ValueError):
        SM2Algorithm.validate_quality(7)


def test_review_record_is_immutable():
    record = make_record()
    with pytest.raises(ValidationError):
        record.repetitions = 3


@pytest.mark.parametrize("field, value", [("ease_factor", 1.29), ("interval", -1), ("repetitions", -2)])
def test_review_record_rejects_out_of_range_values(field, value):
    with pytest.raises(ValidationError):
        make_record(**{field: value})


@pytest.mark.parametrize("ease", [1.305, 2.501, 1.3333])
def test_review_record_rejects_ease_between_hundredths(ease):
    with pytest.raises(ValidationError):
        make_record(ease_factor=ease)


@pytest.mark.parametrize("ease", [1.3, 1.31, 2.36, 2.22, 3.7])
def test_review_record_accepts_ease_in_hundredths(ease):
    assert make_record(ease_factor=ease).ease_factor == ease


def test_ease_update_is_exact_from_floor_neighbourhood():
    # 1.31 + 0.1 = 1.41; 10 * 1.41 = 14.1
    result = grade(make_record(ease_factor=1.31, repetitions=2, interval=10), Quality.PERFECT, DAY0)
    assert result.ease_factor == 1.41
    assert result.interval == 14


def test_due_items_boundary():
    as_of = date(2026, 3, 10)
    due_today = make_record(vocabulary_id="a", next_review_date=as_of)
    tomorrow = make_record(vocabulary_id="b", next_review_date=as_of + timedelta(days=1))

    assert due_items([due_today, tomorrow], as_of) == [due_today]


def test_due_items_preserves_order():
    as_of = date(2026, 3, 10)
    records = [
        make_record(vocabulary_id="late", next_review_date=date(2026, 3, 9)),
        make_record(vocabulary_id="future", next_review_date=date(2026, 4, 1)),
        make_record(vocabulary_id="older", next_review_date=date(2026, 2, 1)),
        make_record(vocabulary_id="today", next_review_date=as_of),
    ]

    assert [r.vocabulary_id for r in due_items(records, as_of)] == ["late", "older", "today"]
    assert due_items([], as_of) == []


def test_perfect_perfect_then_failure():
    day = lambda n: DAY0 + timedelta(days=n)  # noqa: E731

    record = grade(make_record(), 5, day(0))
    assert (record.repetitions, record.interval, record.next_review_date) == (1, 1, day(1).date())

    record = grade(record, 5, day(1))
    assert (record.repetitions, record.interval, record.next_review_date) == (2, 6, day(7).date())
    ease_before_failure = record.ease_factor

    record = grade(record, 1, day(7))
    assert (record.repetitions, record.interval, record.next_review_date) == (0, 1, day(8).date())
    assert record.ease_factor < ease_before_failure
    assert record.ease_factor == 2.16


def test_review_state_transitions():
    record = make_record()
    assert review_state(record) == ReviewState.NEW

    record = grade(record, 4, DAY0)
    assert review_state(record) == ReviewState.LEARNING
    record = grade(record, 4, DAY0 + timedelta(days=1))
    assert review_state(record) == ReviewState.LEARNING
    record = grade(record, 4, DAY0 + timedelta(days=7))
    assert review_state(record) == ReviewState.REVIEW

    record = grade(record, 0, DAY0 + timedelta(days=22))
    assert review_state(record) == ReviewState.LAPSED


def test_ease_storage_conversion():
    assert ease_to_storage(2.5) == 250
    assert ease_to_storage(2.36) == 236
    assert ease_from_storage(130) == 1.3


def test_days_overdue():
    record = make_record(next_review_date=date(2026, 3, 5))
    assert SM2Algorithm.get_days_overdue(record, date(2026, 3, 4)) == 0
    assert SM2Algorithm.get_days_overdue(record, date(2026, 3, 5)) == 0
    assert SM2Algorithm.get_days_overdue(record, date(2026, 3, 8)) == 3
