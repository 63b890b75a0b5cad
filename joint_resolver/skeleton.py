from __future__ import annotations
import numpy as np
from .rigid import JointEntry, JointType, RigidGroup, RigidJoint, PartOccurrence


class SkeletalJoint:
    """
    Description of a movable joint between a parent and a child node of the tree.
    The transforms are left to the exporter, this only carries what is needed to
    compute them.
    """

    def __init__(
        self,
        name: str,
        joint_type: str,
        parent_group_id: int,
        child_group_id: int,
        parent_occurrence: PartOccurrence,
        child_occurrence: PartOccurrence,
        T_world_mate: np.ndarray,
        T_world_reference: np.ndarray,
        axis: np.ndarray | None = None,
        limits: tuple | None = None,
    ):
        self.name: str = name
        self.joint_type: str = joint_type
        self.parent_group_id: int = parent_group_id
        self.child_group_id: int = child_group_id
        self.parent_occurrence: PartOccurrence = parent_occurrence
        self.child_occurrence: PartOccurrence = child_occurrence
        self.T_world_mate: np.ndarray = T_world_mate
        self.T_world_reference: np.ndarray = T_world_reference
        if axis is None:
            axis = np.array([0.0, 0.0, 1.0])
        self.axis: np.ndarray = axis
        self.limits: tuple | None = limits

    @staticmethod
    def create(
        edge: RigidJoint, parent_group: RigidGroup, rigid_types: list | None = None
    ) -> SkeletalJoint:
        """
        Creates the joint description of a (movable) rigid joint, using the
        parent group as the reference frame
        """
        if rigid_types is None:
            rigid_types = [JointType.RIGID]
        entry = movable_entry(edge, rigid_types)
        if entry is None:
            raise Exception(f"ERROR: {edge} does not carry any movable joint")

        child_group_id = edge.other_group(parent_group.id)

        # Orienting the entry from the parent group to the child group
        parent_occurrence = entry.occurrence_one
        child_occurrence = entry.occurrence_two
        limits = entry.limits
        T_world_mate = entry.T_world_mate.copy()
        if (
            entry.occurrence_two in parent_group.occurrences
            and entry.occurrence_one not in parent_group.occurrences
        ):
            parent_occurrence, child_occurrence = child_occurrence, parent_occurrence
            if limits is not None:
                limits = (-limits[1], -limits[0])

        if parent_group.occurrences:
            T_world_reference = parent_group.occurrences[0].T_world_part.copy()
        else:
            T_world_reference = np.eye(4)

        return SkeletalJoint(
            entry.name,
            entry.joint_type,
            parent_group.id,
            child_group_id,
            parent_occurrence,
            child_occurrence,
            T_world_mate,
            T_world_reference,
            entry.axis.copy(),
            limits,
        )

    def T_reference_joint(self) -> np.ndarray:
        """
        The joint frame expressed in the parent group reference frame
        """
        return np.linalg.inv(self.T_world_reference) @ self.T_world_mate

    def __repr__(self):
        return (
            f"SkeletalJoint({self.name!r}, {self.joint_type}, "
            f"{self.parent_group_id} -> {self.child_group_id})"
        )


def movable_entry(edge: RigidJoint, rigid_types: list) -> JointEntry | None:
    """
    First joint entry of the edge allowing motion
    """
    for entry in edge.joints:
        if entry.joint_type not in rigid_types:
            return entry

    return None


class RigidNode:
    """
    Node of the kinematic tree, wrapping a (merged) rigid group
    """

    def __init__(self, group: RigidGroup):
        self.group: RigidGroup = group
        self.children: list[tuple[SkeletalJoint, RigidNode]] = []
        self.parent: RigidNode | None = None
        self.parent_joint: SkeletalJoint | None = None

    @property
    def occurrences(self) -> list[PartOccurrence]:
        return self.group.occurrences

    def add_child(self, joint: SkeletalJoint, child: RigidNode):
        child.parent = self
        child.parent_joint = joint
        self.children.append((joint, child))

    def walk(self):
        """
        Iterate over this node and all its descendants, depth first
        """
        yield self
        for _, child in self.children:
            yield from child.walk()

    def all_joints(self) -> list[SkeletalJoint]:
        joints = []
        for node in self.walk():
            for joint, _ in node.children:
                joints.append(joint)

        return joints

    def __repr__(self):
        return f"RigidNode({self.group.name!r}, {len(self.children)} children)"
