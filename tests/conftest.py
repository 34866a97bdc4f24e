"""Pytest configuration and fixtures."""

import copy
import os

import pytest

# Loggers pick their level when first created, at module import.
os.environ["SKILLCASCADE_ENV"] = "test"

from skillcascade.core.prerequisite_graph import PrerequisiteData, PrerequisiteGraph  # noqa: E402
from skillcascade.core.taxonomy import Taxonomy, TaxonomyData  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables."""
    os.environ["SKILLCASCADE_ENV"] = "test"


# Small two-domain framework used where the bundled data has no example
# of a property (e.g. a skill with five prerequisites).
SMALL_TAXONOMY = {
    "domains": [
        {
            "id": "d1",
            "name": "Regulation",
            "sub_areas": [
                {
                    "id": "d1-sa1",
                    "name": "Noticing",
                    "skill_groups": [
                        {
                            "id": "d1-sa1-sg1",
                            "name": "Detect",
                            "skills": [
                                {"id": "d1-sa1-sg1-s1", "name": "Heart rate", "tier": 1},
                                {"id": "d1-sa1-sg1-s2", "name": "Breathing", "tier": 1},
                                {"id": "d1-sa1-sg1-s3", "name": "Tension", "tier": 2},
                                {"id": "d1-sa1-sg1-s4", "name": "Temperature", "tier": 2},
                                {"id": "d1-sa1-sg1-s5", "name": "Sequence", "tier": 3},
                            ],
                        }
                    ],
                },
                {
                    "id": "d1-sa2",
                    "name": "Calming",
                    "skill_groups": [
                        {
                            "id": "d1-sa2-sg1",
                            "name": "Calm down",
                            "skills": [
                                {"id": "d1-sa2-sg1-s1", "name": "Slow breathing", "tier": 3},
                                {"id": "d1-sa2-sg1-s2", "name": "Self-soothe", "tier": 4},
                            ],
                        }
                    ],
                },
            ],
        },
        {
            "id": "d2",
            "name": "Self-Awareness",
            "sub_areas": [
                {
                    "id": "d2-sa1",
                    "name": "Naming",
                    "skill_groups": [
                        {
                            "id": "d2-sa1-sg1",
                            "name": "Label",
                            "skills": [
                                {"id": "d2-sa1-sg1-s1", "name": "Label feelings", "tier": 2},
                                {"id": "d2-sa1-sg1-s2", "name": "Label intensity", "tier": 3},
                                {"id": "d2-sa1-sg1-s3", "name": "Label mixed feelings", "tier": 5},
                            ],
                        }
                    ],
                }
            ],
        },
    ]
}

SMALL_PREREQUISITES = {
    "skill_prerequisites": {
        "d1-sa2-sg1-s1": ["d1-sa1-sg1-s5"],
        "d1-sa2-sg1-s2": [
            "d1-sa1-sg1-s1",
            "d1-sa1-sg1-s2",
            "d1-sa1-sg1-s3",
            "d1-sa1-sg1-s4",
            "d1-sa1-sg1-s5",
        ],
        "d2-sa1-sg1-s2": ["d1-sa2-sg1-s1"],
    },
    "sub_area_prerequisites": {"d2-sa1": ["d1-sa1"]},
    "domain_relationships": [{"dependent": "d2", "prerequisite": "d1", "type": "requires"}],
}


def build_graph(taxonomy: dict, prerequisites: dict) -> PrerequisiteGraph:
    """Build a graph from raw dicts shaped like the JSON data assets."""
    tax = Taxonomy(TaxonomyData.model_validate(taxonomy))
    return PrerequisiteGraph(tax, PrerequisiteData.model_validate(prerequisites))


@pytest.fixture
def taxonomy_dict() -> dict:
    return copy.deepcopy(SMALL_TAXONOMY)


@pytest.fixture
def prerequisites_dict() -> dict:
    return copy.deepcopy(SMALL_PREREQUISITES)


@pytest.fixture
def small_graph() -> PrerequisiteGraph:
    return build_graph(SMALL_TAXONOMY, SMALL_PREREQUISITES)


@pytest.fixture
def graph_factory():
    """Build a graph from (possibly edited) taxonomy and prerequisite dicts."""
    return build_graph
