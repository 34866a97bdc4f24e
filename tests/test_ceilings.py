"""Tests for the skill ceiling model."""

import pytest

from skillcascade.core.influence import (
    all_ceilings,
    ceiling_coverage,
    ceiling_from_prereq,
    constrained_skills,
    max_gap,
    skill_ceiling,
)
from skillcascade.core.taxonomy import UnknownSkillError

INTEROCEPTION = ["d1-sa1-sg1-s1", "d1-sa1-sg1-s2", "d1-sa1-sg1-s3", "d1-sa1-sg1-s4"]


# ============================================================================
# Gap and single-prerequisite ceilings
# ============================================================================


class TestMaxGap:
    def test_tight_coupling(self):
        assert max_gap(0.95) == 1
        assert max_gap(0.76) == 1

    def test_boundary_rounds_half_up(self):
        # 1 + 2 * 0.25 = 1.5
        assert max_gap(0.75) == 2

    def test_moderate_coupling(self):
        assert max_gap(0.5) == 2
        assert max_gap(0.26) == 2

    def test_loose_coupling(self):
        # 1 + 2 * 0.75 = 2.5
        assert max_gap(0.25) == 3


class TestCeilingFromPrereq:
    def test_unassessed_counts_as_zero(self):
        assert ceiling_from_prereq(None, 0.9) == 1

    def test_capped_at_three(self):
        assert ceiling_from_prereq(2, 0.5) == 3
        assert ceiling_from_prereq(3, 0.95) == 3

    def test_zero_level_moderate(self):
        assert ceiling_from_prereq(0, 0.6) == 2


# ============================================================================
# Per-skill ceilings
# ============================================================================


class TestSkillCeiling:
    def test_all_prereqs_unassessed(self):
        data = skill_ceiling("d2-sa1-sg2-s1", {})
        assert data.ceiling == 1
        assert [p.strength for p in data.constraining_prereqs] == [0.95, 0.90, 0.85, 0.80]
        assert all(p.imposed_ceiling == 1 for p in data.constraining_prereqs)
        assert all(p.level is None for p in data.constraining_prereqs)

    def test_weakest_link_gates(self):
        assessments = {"d1-sa1-sg1-s1": 3, "d1-sa1-sg1-s2": 3, "d1-sa1-sg1-s3": 3, "d1-sa1-sg1-s4": 1}
        data = skill_ceiling("d2-sa1-sg2-s1", assessments)
        assert data.ceiling == 2
        assert data.constraining_prereqs[0].id == "d1-sa1-sg1-s4"

    def test_all_prereqs_solid(self):
        data = skill_ceiling("d2-sa1-sg2-s1", {p: 3 for p in INTEROCEPTION})
        assert data.ceiling == 3

    def test_all_prereqs_developing(self):
        data = skill_ceiling("d2-sa1-sg2-s1", {p: 2 for p in INTEROCEPTION})
        assert data.ceiling == 3

    def test_one_absent_prereq_gates_solid_ones(self):
        assessments = {"d1-sa1-sg1-s1": 0, "d1-sa1-sg1-s2": 3, "d1-sa1-sg1-s3": 3, "d1-sa1-sg1-s4": 3}
        data = skill_ceiling("d2-sa1-sg2-s1", assessments)
        assert data.ceiling == 1
        assert data.constraining_prereqs[0].id == "d1-sa1-sg1-s1"

    def test_none_is_unassessed(self):
        with_none = skill_ceiling("d2-sa1-sg2-s1", {p: None for p in INTEROCEPTION})
        assert with_none == skill_ceiling("d2-sa1-sg2-s1", {})

    def test_no_prerequisites_returns_none(self):
        assert skill_ceiling("d1-sa1-sg1-s1", {}) is None

    def test_unknown_skill_raises(self):
        with pytest.raises(UnknownSkillError):
            skill_ceiling("d1-sa1-sg1-s99", {})

    def test_ceiling_never_exceeds_min_imposed(self):
        for data in all_ceilings({"d1-sa1-sg1-s1": 2, "d3-sa2-sg3-s1": 1}).values():
            assert data.ceiling == min(p.imposed_ceiling for p in data.constraining_prereqs)


class TestAllCeilings:
    def test_one_entry_per_dependent(self):
        assert len(all_ceilings({})) == 133

    def test_skills_without_prereqs_absent(self):
        assert "d1-sa1-sg1-s1" not in all_ceilings({})

    def test_constraining_sorted_tightest_first(self):
        for data in all_ceilings({"d1-sa1-sg1-s1": 3, "d1-sa2-sg3-s1": 2}).values():
            imposed = [p.imposed_ceiling for p in data.constraining_prereqs]
            assert imposed == sorted(imposed)


# ============================================================================
# Constrained skills
# ============================================================================


class TestConstrainedSkills:
    def test_empty_assessments(self):
        assert constrained_skills({}) == []

    def test_unassessed_dependents_never_constrained(self):
        assert constrained_skills({p: 0 for p in INTEROCEPTION}) == []

    def test_developing_above_tight_prereq(self):
        (entry,) = constrained_skills({"d1-sa1-sg1-s1": 0, "d2-sa1-sg2-s1": 2})
        assert entry.skill_id == "d2-sa1-sg2-s1"
        assert entry.ceiling == 1
        assert entry.gap == 1

    def test_sorted_by_gap(self):
        assessments = {p: 0 for p in INTEROCEPTION}
        assessments.update({"d2-sa1-sg2-s1": 3, "d1-sa1-sg4-s3": 0, "d2-sa1-sg2-s2": 2})
        result = constrained_skills(assessments)
        assert [(c.skill_id, c.gap) for c in result] == [
            ("d2-sa1-sg2-s1", 2),
            ("d2-sa1-sg2-s2", 1),
        ]
        assert len(result[0].constraining_prereqs) == 4
        assert len(result[1].constraining_prereqs) == 1
        assert result[0].domain_id == "d2"

    def test_constraining_prereqs_below_level_only(self):
        assessments = {"d1-sa1-sg1-s1": 2, "d1-sa1-sg1-s2": 0, "d1-sa1-sg1-s3": 0, "d1-sa1-sg1-s4": 0}
        assessments["d2-sa1-sg2-s1"] = 3
        (entry,) = constrained_skills(assessments)
        assert entry.ceiling == 1
        assert "d1-sa1-sg1-s1" not in [p.id for p in entry.constraining_prereqs]
        assert all(p.imposed_ceiling < entry.level for p in entry.constraining_prereqs)

    def test_level_at_ceiling_not_constrained(self):
        assessments = {p: 0 for p in INTEROCEPTION}
        assessments["d2-sa1-sg2-s1"] = 1
        assert constrained_skills(assessments) == []


# ============================================================================
# Coverage
# ============================================================================


class TestCeilingCoverage:
    def test_empty_assessments(self):
        coverage = ceiling_coverage({})
        assert coverage.total_skills == 282
        assert coverage.known_ceilings == 149
        assert coverage.coverage == pytest.approx(149 / 282)

    def test_assessing_a_prereq_reveals_dependents(self):
        assert ceiling_coverage({"d1-sa1-sg1-s1": 0}).known_ceilings == 151

    def test_coverage_grows(self):
        assessments = {"d1-sa1-sg1-s1": 0, "d1-sa1-sg3-s1": 2}
        assert ceiling_coverage(assessments).known_ceilings == 155

    def test_none_does_not_count(self):
        assert ceiling_coverage({"d1-sa1-sg1-s1": None}).known_ceilings == 149
