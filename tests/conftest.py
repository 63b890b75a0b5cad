"""
Shared fixtures to build small rigid results by hand.
"""
import numpy as np
import pytest

from joint_resolver import Config, JointEntry, JointType, PartOccurrence, RigidResults


def translation(x: float, y: float, z: float) -> np.ndarray:
    T = np.eye(4)
    T[:3, 3] = [x, y, z]
    return T


def joint(group_a, group_b, joint_type=JointType.ROTATIONAL, name="joint", **kwargs):
    """A joint entry between the first occurrences of two groups."""
    return JointEntry(name, joint_type, group_a.occurrences[0], group_b.occurrences[0], **kwargs)


def constraint(group_a, group_b, name="mate", **kwargs):
    return JointEntry(name, "mate", group_a.occurrences[0], group_b.occurrences[0], **kwargs)


@pytest.fixture
def quiet():
    return Config(verbose=False)


@pytest.fixture
def results():
    return RigidResults()


@pytest.fixture
def make_group(results):
    """Group factory: make_group("base", parts=2, grounded=True)."""

    def factory(name, parts=1, grounded=False, transform=None):
        occurrences = [
            PartOccurrence(f"{name}:{k}", transform) for k in range(parts)
        ]
        return results.make_group(occurrences, grounded, name)

    return factory
