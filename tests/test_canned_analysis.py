import random

import pytest

from app.services.canned_analysis import (
    CANNED_WORKFLOW,
    CATEGORIES,
    PIVOT_HINT,
    analyze_idea,
    match_category,
)


def test_fitness_idea_gets_fitness_category():
    data = analyze_idea("AI fitness coach that fixes your squat form")
    analysis = data["analysis"]

    assert analysis["category"] == "fitness"
    assert analysis["opportunityScore"] == 6
    assert analysis["totalCompetitors"] == 30
    assert [c["name"] for c in analysis["topCompetitors"]] == [
        "Freeletics",
        "Peloton Digital",
        "Fitbod",
        "Aaptiv",
        "Future",
    ]
    assert data["pivot"] is None
    assert "30 competitors" in data["realist"]["text"]


def test_matching_is_case_insensitive_and_first_match_wins():
    assert match_category("Find a JOB at the GYM").slug == "job-search"
    assert match_category("Therapy chatbot").slug == "mental-health"
    assert match_category("quantum widgets") is None


@pytest.mark.parametrize(
    ("idea", "slug", "pivot"),
    [
        ("dating app for hikers", "dating", True),
        ("property price predictor", "real-estate", True),
        ("meal prep planner", "nutrition", False),
    ],
)
def test_low_scores_include_pivot_hint(idea, slug, pivot):
    data = analyze_idea(idea)
    assert data["analysis"]["category"] == slug
    assert (data["pivot"] == PIVOT_HINT) is pivot


def test_default_branch_uses_generic_competitors_and_bounded_numbers():
    for seed in range(20):
        data = analyze_idea("quantum widgets", rng=random.Random(seed))
        analysis = data["analysis"]

        assert analysis["category"] == "general"
        assert 5 <= analysis["totalCompetitors"] <= 24
        assert 5 <= analysis["opportunityScore"] <= 9
        assert [c["name"] for c in analysis["topCompetitors"]] == [
            "OpenAI ChatGPT",
            "Anthropic Claude",
        ]
        assert '"quantum widgets"' in data["optimist"]["text"]


def test_workflow_block_is_fixed_and_not_shared():
    data = analyze_idea("quantum widgets")
    assert data["workflow"] == CANNED_WORKFLOW
    data["workflow"]["step1_productHunt"]["results"] = 0
    assert CANNED_WORKFLOW["step1_productHunt"]["results"] == 5


def test_every_category_template_renders():
    for category in CATEGORIES:
        assert len(category.competitors) == 5
        category.optimist.format(idea="x", count=1)
        category.realist.format(idea="x", count=1)
