from __future__ import annotations
import numpy as np


class JointType:
    """
    Joint type tags carried by assembly joint entries
    """

    RIGID = "rigid"
    ROTATIONAL = "rotational"
    SLIDER = "slider"
    CYLINDRICAL = "cylindrical"
    PLANAR = "planar"
    BALL = "ball"

    MOVABLE = [ROTATIONAL, SLIDER, CYLINDRICAL, PLANAR, BALL]


class PartOccurrence:
    """
    Handle to a part instance of the assembly. Occurrences are compared by
    identity, two occurrences with the same name are still distinct.
    """

    def __init__(
        self,
        name: str,
        T_world_part: np.ndarray | None = None,
        suppressed: bool = False,
    ):
        self.name: str = name
        if T_world_part is None:
            T_world_part = np.eye(4)
        self.T_world_part: np.ndarray = np.array(T_world_part, dtype=float)
        self.suppressed: bool = suppressed

    def __repr__(self):
        return f"PartOccurrence({self.name!r})"


class JointEntry:
    """
    A single assembly joint or constraint between two occurrences
    """

    def __init__(
        self,
        name: str,
        joint_type: str,
        occurrence_one: PartOccurrence,
        occurrence_two: PartOccurrence,
        T_world_mate: np.ndarray | None = None,
        axis: np.ndarray | None = None,
        limits: tuple | None = None,
        suppressed: bool = False,
    ):
        self.name: str = name
        self.joint_type: str = joint_type
        self.occurrence_one: PartOccurrence = occurrence_one
        self.occurrence_two: PartOccurrence = occurrence_two
        if T_world_mate is None:
            T_world_mate = occurrence_one.T_world_part.copy()
        self.T_world_mate: np.ndarray = np.array(T_world_mate, dtype=float)
        self.axis: np.ndarray = np.array(axis if axis is not None else [0.0, 0.0, 1.0], dtype=float)
        self.limits: tuple | None = limits
        self.suppressed: bool = suppressed

    def is_suppressed(self) -> bool:
        return (
            self.suppressed
            or self.occurrence_one.suppressed
            or self.occurrence_two.suppressed
        )

    def __repr__(self):
        return f"JointEntry({self.name!r}, {self.joint_type!r})"


class RigidGroup:
    """
    A set of occurrences moving together. Groups are addressed by their id.
    """

    def __init__(
        self,
        id: int,
        occurrences: list[PartOccurrence] | None = None,
        grounded: bool = False,
        name: str | None = None,
    ):
        self.id: int = id
        self.occurrences: list[PartOccurrence] = list(occurrences or [])
        self.grounded: bool = grounded
        self.name: str = name if name is not None else f"group_{id}"

    def is_empty(self) -> bool:
        return len(self.occurrences) == 0

    def __repr__(self):
        return f"RigidGroup({self.id}, {self.name!r}, {len(self.occurrences)} occurrences)"


class RigidJoint:
    """
    Relation between two groups, backed by movable joints and/or constraints
    """

    def __init__(
        self,
        group_one: int,
        group_two: int,
        joints: list[JointEntry] | None = None,
        constraints: list[JointEntry] | None = None,
    ):
        self.group_one: int = group_one
        self.group_two: int = group_two
        self.joints: list[JointEntry] = list(joints or [])
        self.constraints: list[JointEntry] = list(constraints or [])

    def connects(self, group_a: int, group_b: int) -> bool:
        return (self.group_one == group_a and self.group_two == group_b) or (
            self.group_one == group_b and self.group_two == group_a
        )

    def other_group(self, group_id: int) -> int:
        if group_id == self.group_one:
            return self.group_two
        elif group_id == self.group_two:
            return self.group_one
        else:
            raise Exception(f"ERROR: group {group_id} is not part of this joint")

    def entry_count(self) -> int:
        return len(self.joints) + len(self.constraints)

    def __repr__(self):
        return (
            f"RigidJoint({self.group_one} <-> {self.group_two}, "
            f"{len(self.joints)} joints, {len(self.constraints)} constraints)"
        )


class RigidResults:
    """
    The whole assembly graph: ordered groups and ordered joints
    """

    def __init__(self):
        self.groups: list[RigidGroup] = []
        self.joints: list[RigidJoint] = []
        # Next group id to allocate
        self.current_group_id: int = 0

    def make_group(
        self,
        occurrences: list[PartOccurrence] | None = None,
        grounded: bool = False,
        name: str | None = None,
    ) -> RigidGroup:
        """
        Allocate a new group and append it to the results
        """
        group = RigidGroup(self.current_group_id, occurrences, grounded, name)
        self.current_group_id += 1
        self.groups.append(group)

        return group

    def make_joint(
        self,
        group_one: RigidGroup | int,
        group_two: RigidGroup | int,
        joints: list[JointEntry] | None = None,
        constraints: list[JointEntry] | None = None,
    ) -> RigidJoint:
        """
        Append a joint between two groups (given as groups or ids)
        """
        if isinstance(group_one, RigidGroup):
            group_one = group_one.id
        if isinstance(group_two, RigidGroup):
            group_two = group_two.id

        joint = RigidJoint(group_one, group_two, joints, constraints)
        self.joints.append(joint)

        return joint

    def group(self, group_id: int) -> RigidGroup | None:
        for group in self.groups:
            if group.id == group_id:
                return group

        return None

    def groups_by_id(self) -> dict[int, RigidGroup]:
        return {group.id: group for group in self.groups}

    def grounded_groups(self) -> list[RigidGroup]:
        return [group for group in self.groups if group.grounded]
