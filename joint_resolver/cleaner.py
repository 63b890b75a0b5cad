from __future__ import annotations
from .config import Config
from .message import bright, dim, success, warning
from .rigid import RigidJoint, RigidResults
from .skeleton import RigidNode, SkeletalJoint, movable_entry

# Rigid joint classification
MOVABLE = "movable"
RIGID = "rigid"
AMBIGUOUS = "ambiguous"


class InvalidStateError(Exception):
    """
    The rigid results can't be turned into a kinematic tree
    """


class NoGroundError(InvalidStateError):
    pass


class DisconnectedError(InvalidStateError):
    pass


def pair_key(group_a: int, group_b: int) -> tuple[int, int]:
    return (group_a, group_b) if group_a <= group_b else (group_b, group_a)


class PlannedJoint:
    """
    Joint creation deferred until all the merges are applied
    """

    def __init__(self, joint: RigidJoint, parent_node: RigidNode, node: RigidNode):
        self.joint: RigidJoint = joint
        self.parent_node: RigidNode = parent_node
        self.node: RigidNode = node


class RigidCleaner:
    """
    Simplifies rigid results and turns them into a tree of rigid nodes
    """

    def __init__(self, config: Config | None = None):
        if config is None:
            config = Config()
        self.config: Config = config

        # Anomalies found while cleaning, for the caller to inspect
        self.diagnostics: list[str] = []
        # Group ids reached by the last tree synthesis
        self.closed: set[int] = set()
        # Merges applied by the last tree synthesis, source id -> target id
        self.merge_into: dict[int, int] = {}
        # First movable joint between each pair of groups, filled by joint_maps
        self.movable_joints: dict[tuple[int, int], RigidJoint] = {}

    def log(self, message: str):
        if self.config.verbose:
            print(message)

    def diagnostic(self, message: str):
        self.diagnostics.append(message)
        self.log(warning(f"WARNING: {message}"))

    def clean_meaningless(self, results: RigidResults):
        """
        Removes all the meaningless items from the results:
        - suppressed occurrences,
        - suppressed joints and constraints, or those with a suppressed occurrence,
        - rigid joints between the same group, with an empty or unknown group,
          or without any joint or constraint,
        - empty groups.
        """
        for group in results.groups:
            group.occurrences = [
                occurrence for occurrence in group.occurrences if not occurrence.suppressed
            ]

        for joint in results.joints:
            joint.joints = [entry for entry in joint.joints if not entry.is_suppressed()]
            joint.constraints = [
                entry for entry in joint.constraints if not entry.is_suppressed()
            ]

        groups = results.groups_by_id()
        kept = []
        for joint in results.joints:
            if joint.group_one not in groups or joint.group_two not in groups:
                self.diagnostic(f"dropping {joint}, it references an unknown group")
                continue
            if (
                joint.group_one == joint.group_two
                or groups[joint.group_one].is_empty()
                or groups[joint.group_two].is_empty()
                or joint.entry_count() <= 0
            ):
                continue
            kept.append(joint)
        results.joints = kept

        results.groups = [group for group in results.groups if not group.is_empty()]

    def clean_grounded_bodies(self, results: RigidResults):
        """
        Merges all the grounded groups into the first one, and redirects the
        joints of the emptied groups to it.
        """
        grounded = results.grounded_groups()
        if len(grounded) == 0:
            raise NoGroundError("ERROR: no grounded group in the assembly")

        root = grounded[0]
        for group in grounded[1:]:
            self.log(dim(f"  Merging grounded {group.name} into {root.name}"))
            root.occurrences.extend(group.occurrences)
            group.occurrences.clear()

        groups = results.groups_by_id()
        for joint in results.joints:
            if joint.group_one in groups and groups[joint.group_one].is_empty():
                joint.group_one = root.id
            if joint.group_two in groups and groups[joint.group_two].is_empty():
                joint.group_two = root.id

        self.clean_meaningless(results)

    def classify(self, joint: RigidJoint) -> str:
        """
        A joint is movable if one of its joints allows motion, rigid if it has
        constraints or several rigid joints. A single rigid joint without
        constraints is ambiguous and left out of the joint maps.
        """
        rigid_types = self.config.rigid_joint_types

        if movable_entry(joint, rigid_types) is not None:
            return MOVABLE
        elif len(joint.constraints) > 0 or len(joint.joints) > 1:
            return RIGID
        else:
            return AMBIGUOUS

    def joint_maps(self, results: RigidResults) -> tuple[dict, dict]:
        """
        Map each group id to the group ids connected to it by a movable joint,
        and by a rigid one. Neighbours are kept in discovery order.
        """
        movable: dict[int, list[int]] = {}
        rigid: dict[int, list[int]] = {}
        self.movable_joints = {}
        for group in results.groups:
            movable[group.id] = []
            rigid[group.id] = []

        for joint in results.joints:
            if joint.group_one not in movable or joint.group_two not in movable:
                self.diagnostic(f"ignoring {joint}, it references an unknown group")
                continue

            kind = self.classify(joint)
            if kind == MOVABLE:
                target = movable
                self.movable_joints.setdefault(
                    pair_key(joint.group_one, joint.group_two), joint
                )
            elif kind == RIGID:
                target = rigid
            else:
                self.diagnostic(
                    f"ignoring {joint}, a single rigid joint without constraints is ambiguous"
                )
                continue

            if joint.group_two not in target[joint.group_one]:
                target[joint.group_one].append(joint.group_two)
            if joint.group_one not in target[joint.group_two]:
                target[joint.group_two].append(joint.group_one)

        return movable, rigid

    def movable_joint(self, group_a: int, group_b: int) -> RigidJoint | None:
        """
        First movable joint (in joints order) between two groups, as recorded
        by the last call to joint_maps
        """
        return self.movable_joints.get(pair_key(group_a, group_b))

    def build_tree(self, results: RigidResults) -> RigidNode:
        """
        Merges the groups connected only by rigid joints and builds the node tree.

        Starting from the grounded group, the graph is explored breadth first.
        A movable joint creates a new node (starting a new branch), a rigid one
        merges the reached group into the group owning the current branch.
        """
        movable, rigid = self.joint_maps(results)
        groups = results.groups_by_id()

        root = None
        for group in results.groups:
            if group.grounded:
                root = group
                break
        if root is None:
            raise NoGroundError("ERROR: no grounded group in the assembly")

        # Merged group id -> id of the group owning its branch
        merge_into: dict[int, int] = {}
        # Group id -> tree node
        nodes: dict[int, RigidNode] = {}
        # Joints are created once the merges are applied
        planned_joints: list[PlannedJoint] = []

        root_node = RigidNode(root)
        nodes[root.id] = root_node
        # Entries are [current group id, branch group id]
        frontier = [(root.id, root.id)]
        closed = {root.id}

        self.log(bright("* Determining merge commands"))
        while len(frontier) > 0:
            next_frontier = []
            for current, branch in frontier:
                for other in movable[current]:
                    if other in closed:
                        continue
                    closed.add(other)
                    node = RigidNode(groups[other])
                    nodes[other] = node
                    joint = self.movable_joint(current, other)
                    planned_joints.append(PlannedJoint(joint, nodes[branch], node))
                    next_frontier.append((other, other))

                for other in rigid[current]:
                    if other in closed:
                        continue
                    closed.add(other)
                    merge_into[other] = branch
                    next_frontier.append((other, branch))
            frontier = next_frontier

        self.log(bright(f"* Applying {len(merge_into)} merge commands"))
        for source_id, target_id in merge_into.items():
            source = groups[source_id]
            target = groups[target_id]
            self.log(dim(f"  Merging {source.name} into {target.name}"))
            target.occurrences.extend(source.occurrences)
            source.occurrences.clear()
            target.grounded = target.grounded or source.grounded

        self.log(bright("* Resolving broken joints"))
        for joint in results.joints:
            if joint.group_one in merge_into:
                joint.group_one = merge_into[joint.group_one]
            if joint.group_two in merge_into:
                joint.group_two = merge_into[joint.group_two]

        self.log(bright("* Creating planned skeletal joints"))
        for planned in planned_joints:
            skeletal_joint = SkeletalJoint.create(
                planned.joint, planned.parent_node.group, self.config.rigid_joint_types
            )
            planned.parent_node.add_child(skeletal_joint, planned.node)
            self.log(
                success(
                    f"+ {planned.parent_node.group.name} -> {planned.node.group.name} "
                    f"({skeletal_joint.joint_type} {skeletal_joint.name})"
                )
            )

        self.log(bright("* Cleaning remainders"))
        self.clean_meaningless(results)

        self.closed = closed
        self.merge_into = merge_into

        return root_node
