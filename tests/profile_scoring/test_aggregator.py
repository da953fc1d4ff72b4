# tests/profile_scoring/test_aggregator.py
import random

from services.profile_scoring.aggregator import aggregate, normalize_component_key, normalize_score_map
from services.profile_scoring.models import Answer, QuestionComponentLink


# --- Helper Functions ---
def make_answers(scores: dict) -> list:
    """question_id -> score into Answer objects."""
    return [Answer(question_id=qid, option_id=f"{qid}-opt", score=s) for qid, s in scores.items()]

def make_links(pairs: list) -> list:
    return [QuestionComponentLink(question_id=q, component_key=c) for q, c in pairs]


# --- Test Cases ---

def test_aggregate_sums_per_component():
    answers = make_answers({"q1": 5, "q2": 3, "q3": 4})
    links = make_links([("q1", "a"), ("q2", "a"), ("q3", "b")])
    assert aggregate(answers, links) == {"a": 8, "b": 4}

def test_aggregate_question_fans_out_to_multiple_components():
    answers = make_answers({"q1": 4})
    links = make_links([("q1", "a"), ("q1", "b")])
    assert aggregate(answers, links) == {"a": 4, "b": 4}

def test_aggregate_ignores_unlinked_answers():
    answers = make_answers({"q1": 5, "orphan": 3})
    links = make_links([("q1", "a")])
    assert aggregate(answers, links) == {"a": 5}

def test_aggregate_empty_inputs():
    assert aggregate([], []) == {}
    assert aggregate(make_answers({"q1": 2}), []) == {}

def test_aggregate_untouched_components_are_absent():
    answers = make_answers({"q1": 2})
    links = make_links([("q1", "a"), ("q2", "b")])
    assert aggregate(answers, links) == {"a": 2}

def test_aggregate_passes_out_of_range_scores_through():
    answers = make_answers({"q1": 9, "q2": -2})
    links = make_links([("q1", "a"), ("q2", "a")])
    assert aggregate(answers, links) == {"a": 7}

def test_aggregate_counts_every_repeated_link():
    answers = make_answers({"q1": 3})
    links = make_links([("q1", "a"), ("q1", "a")])
    assert aggregate(answers, links) == {"a": 6}

def test_aggregate_sum_invariant():
    """Total score equals the summed scores of every answer that has a link."""
    answers = make_answers({"q1": 5, "q2": 1, "q3": 4, "q4": 2, "q5": 3})
    links = make_links([("q1", "a"), ("q2", "b"), ("q3", "a"), ("q4", "c")])
    scores = aggregate(answers, links)
    linked = {link.question_id for link in links}
    assert sum(scores.values()) == sum(a.score for a in answers if a.question_id in linked)

def test_aggregate_is_order_independent():
    answers = make_answers({f"q{i}": (i % 5) + 1 for i in range(20)})
    links = make_links([(f"q{i}", f"c{i % 4}") for i in range(20)] + [("q3", "c9")])
    expected = aggregate(answers, links)

    rng = random.Random(7)
    for _ in range(5):
        shuffled_answers = answers[:]
        shuffled_links = links[:]
        rng.shuffle(shuffled_answers)
        rng.shuffle(shuffled_links)
        assert aggregate(shuffled_answers, shuffled_links) == expected

def test_aggregate_does_not_mutate_inputs():
    answers = make_answers({"q1": 5})
    links = make_links([("q1", "a")])
    aggregate(answers, links)
    assert answers[0].score == 5
    assert len(links) == 1


# Test cases for key normalisation
def test_normalize_component_key():
    assert normalize_component_key("self_identity") == "self-identity"
    assert normalize_component_key("self-identity") == "self-identity"

def test_normalize_score_map_later_colliding_key_wins():
    assert normalize_score_map({"self_esteem": 4, "self-esteem": 3, "self_agency": 2}) == {
        "self-esteem": 3,
        "self-agency": 2,
    }
