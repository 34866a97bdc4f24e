"""Assessment levels and snapshot access.

Assessment levels:
    absent / None = not yet assessed
    0 = not present (clinician confirmed the skill is absent)
    1 = needs work
    2 = developing
    3 = solid

For all propagation math an unassessed skill counts as level 0. Presence of a
concrete level is the only signal that a skill has been assessed.
"""

from collections.abc import Mapping
from enum import IntEnum
from typing import Optional


class AssessmentLevel(IntEnum):
    NOT_PRESENT = 0
    NEEDS_WORK = 1
    DEVELOPING = 2
    SOLID = 3


MAX_LEVEL = int(AssessmentLevel.SOLID)

# A prerequisite counts as met for readiness at Developing or above
MET_THRESHOLD = int(AssessmentLevel.DEVELOPING)

# skill_id -> level (0-3); missing keys and None values are unassessed
Assessments = Mapping[str, Optional[int]]


def assessed_level(assessments: Assessments, skill_id: str) -> int | None:
    """Raw assessed level, or None if the skill has not been assessed."""
    return assessments.get(skill_id)


def is_assessed(assessments: Assessments, skill_id: str) -> bool:
    return assessments.get(skill_id) is not None


def effective_level(assessments: Assessments, skill_id: str) -> int:
    """Level used for propagation math: unassessed counts as 0."""
    level = assessments.get(skill_id)
    return 0 if level is None else level
