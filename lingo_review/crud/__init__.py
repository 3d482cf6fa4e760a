from lingo_review.crud.learner import (
    create_learner,
    get_learner,
    get_learner_by_username,
    delete_learner
)
from lingo_review.crud.catalog import (
    create_scenario,
    get_scenario,
    list_scenarios,
    add_vocabulary_items,
    get_vocabulary_item,
    get_vocabulary_items,
    list_scenario_vocabulary,
    delete_vocabulary_item
)
from lingo_review.crud.review_schedule import (
    get_review,
    get_or_create_review,
    save_review,
    grade_vocabulary,
    get_learner_reviews,
    get_due_reviews,
    prune_orphaned_reviews
)
from lingo_review.crud.progress import (
    get_progress,
    record_study_day,
    apply_review,
    submit_quiz
)

__all__ = [
    "create_learner",
    "get_learner",
    "get_learner_by_username",
    "delete_learner",
    "create_scenario",
    "get_scenario",
    "list_scenarios",
    "add_vocabulary_items",
    "get_vocabulary_item",
    "get_vocabulary_items",
    "list_scenario_vocabulary",
    "delete_vocabulary_item",
    "get_review",
    "get_or_create_review",
    "save_review",
    "grade_vocabulary",
    "get_learner_reviews",
    "get_due_reviews",
    "prune_orphaned_reviews",
    "get_progress",
    "record_study_day",
    "apply_review",
    "submit_quiz",
]
