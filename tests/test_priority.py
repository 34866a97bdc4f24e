"""Tests for Start Here priority ordering."""

from skillcascade.core.influence import start_here_priority
from skillcascade.core.influence.priority import (
    REASON_FILLS_COVERAGE,
    REASON_FIRST_IN_DOMAIN,
    REASON_FOUNDATION_SKILL,
    REASON_FOUNDATION_TIER,
    REASON_HIGH_INFLUENCE,
    REASON_JUNCTION,
    REASON_PREREQUISITE,
    _reason,
)
from skillcascade.core.taxonomy import get_taxonomy


# ============================================================================
# Reason selection
# ============================================================================


class TestReason:
    def test_high_influence_wins(self):
        assert _reason(5, 1, True, True, True) == REASON_HIGH_INFLUENCE

    def test_foundation_skill(self):
        assert _reason(2, 2, True, False, True) == REASON_FOUNDATION_SKILL

    def test_first_in_domain(self):
        assert _reason(0, 3, False, False, True) == REASON_FIRST_IN_DOMAIN

    def test_junction(self):
        assert _reason(2, 3, True, True, False) == REASON_JUNCTION

    def test_prerequisite(self):
        assert _reason(2, 3, True, False, False) == REASON_PREREQUISITE

    def test_foundation_tier(self):
        assert _reason(0, 2, False, False, False) == REASON_FOUNDATION_TIER

    def test_fallback(self):
        assert _reason(0, 4, False, False, False) == REASON_FILLS_COVERAGE


# ============================================================================
# Ranking
# ============================================================================


class TestStartHerePriority:
    def test_empty_assessments_lists_every_skill(self):
        assert len(start_here_priority({})) == 282

    def test_top_entry(self):
        top = start_here_priority({})[0]
        assert top.skill_id == "d1-sa4-sg3-s1"
        assert top.priority == 149
        assert top.reason == REASON_HIGH_INFLUENCE
        assert top.domain_name == "Regulation"

    def test_sorted_descending(self):
        priorities = [entry.priority for entry in start_here_priority({})]
        assert priorities == sorted(priorities, reverse=True)

    def test_assessed_skills_excluded(self):
        result = start_here_priority({"d1-sa4-sg3-s1": 2, "d1-sa1-sg1-s1": 0})
        ids = {entry.skill_id for entry in result}
        assert "d1-sa4-sg3-s1" not in ids
        assert "d1-sa1-sg1-s1" not in ids
        assert len(result) == 280

    def test_none_still_listed(self):
        ids = [entry.skill_id for entry in start_here_priority({"d1-sa4-sg3-s1": None})]
        assert ids[0] == "d1-sa4-sg3-s1"

    def test_foundations_first(self):
        top = start_here_priority({})[:20]
        assert sum(entry.tier for entry in top) / len(top) < 3

    def test_top_entries_have_downstream(self):
        assert all(entry.downstream_count > 0 for entry in start_here_priority({})[:30])

    def test_unassessed_domains_rise(self):
        top = start_here_priority({"d1-sa1-sg1-s1": 2})[:20]
        assert sum(1 for entry in top if entry.domain_id != "d1") >= 10

    def test_ties_keep_taxonomy_order(self):
        order = {skill_id: i for i, skill_id in enumerate(get_taxonomy().skill_ids())}
        result = start_here_priority({})
        for a, b in zip(result, result[1:]):
            if a.priority == b.priority:
                assert order[a.skill_id] < order[b.skill_id]

    def test_deterministic(self):
        first = [entry.skill_id for entry in start_here_priority({"d2-sa1-sg2-s1": 1})]
        second = [entry.skill_id for entry in start_here_priority({"d2-sa1-sg2-s1": 1})]
        assert first == second

    def test_repeat_calls_serialize_identically(self):
        assessments = {"d1-sa1-sg1-s1": 2, "d3-sa2-sg2-s1": 1, "d5-sa2-sg1-s1": None}
        first = [entry.model_dump_json() for entry in start_here_priority(assessments)]
        second = [entry.model_dump_json() for entry in start_here_priority(assessments)]
        assert first == second
