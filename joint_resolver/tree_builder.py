from __future__ import annotations
from .config import Config
from .message import bright, error, info, success
from .rigid import JointType, RigidResults
from .cleaner import RigidCleaner, DisconnectedError
from .skeleton import RigidNode


class TreeBuilder:
    """
    Turns rigid results (groups of parts and the joints between them) into a
    single rooted tree of rigid nodes. The results are modified in place.
    """

    def __init__(self, results: RigidResults, config: Config | None = None):
        if config is None:
            config = Config()
        self.config: Config = config
        self.results: RigidResults = results
        self.cleaner: RigidCleaner = RigidCleaner(config)
        self.disconnected: list = []

        self.log(bright(f"* Cleaning {len(results.groups)} groups and {len(results.joints)} joints"))
        self.cleaner.clean_meaningless(results)

        self.log(bright("* Merging grounded groups"))
        self.cleaner.clean_grounded_bodies(results)

        self.root: RigidNode = self.cleaner.build_tree(results)
        self.check_connected()

        self.log(
            success(
                f"* Kinematic tree built: {len(self.nodes())} nodes, "
                f"{len(self.root.all_joints())} joints, "
                f"{len(self.cleaner.merge_into)} merges"
            )
        )
        if self.config.print_tree:
            self.print_kinematic_tree()

    @property
    def diagnostics(self) -> list[str]:
        return self.cleaner.diagnostics

    def log(self, message: str):
        if self.config.verbose:
            print(message)

    def check_connected(self):
        """
        Report the groups that could not be reached from the ground
        """
        self.disconnected = [
            group for group in self.results.groups if group.id not in self.cleaner.closed
        ]
        if not self.disconnected:
            return

        names = ", ".join(group.name for group in self.disconnected)
        if not self.config.allow_disconnected:
            self.log(error(f"ERROR: {len(self.disconnected)} groups are not connected to the ground"))
            raise DisconnectedError(
                f"ERROR: groups not connected to the ground: {names}"
            )

        self.cleaner.diagnostic(
            f"{len(self.disconnected)} groups not connected to the ground are left out of the tree: {names}"
        )

    def nodes(self) -> list[RigidNode]:
        return list(self.root.walk())

    def summary(self) -> dict:
        return {
            "nodes": len(self.nodes()),
            "joints": len(self.root.all_joints()),
            "merges": len(self.cleaner.merge_into),
            "disconnected": len(self.disconnected),
        }

    def print_kinematic_tree(self):
        """Print visual tree structure using ASCII box-drawing characters."""
        print(bright("\nKinematic Tree Structure:"))
        print(bright("=" * 70))
        print(success(f"  {self.root.group.name} (ROOT)"))
        self._print_tree_recursive(self.root, prefix="")
        print()

    def _print_tree_recursive(self, node: RigidNode, prefix: str = ""):
        for i, (joint, child) in enumerate(node.children):
            is_last_child = i == len(node.children) - 1

            joint_type_symbol = {
                JointType.ROTATIONAL: "⟲",
                JointType.SLIDER: "⇄",
                JointType.CYLINDRICAL: "⟳",
                JointType.PLANAR: "▭",
                JointType.BALL: "●",
            }.get(joint.joint_type, "?")
            joint_info = f" [{joint_type_symbol} {joint.name}]"
            occurrences_info = info(f" ({len(child.occurrences)} parts)")

            connector = "└── " if is_last_child else "├── "
            print(success(f"  {prefix}{connector}{child.group.name}{joint_info}") + occurrences_info)

            extension = "    " if is_last_child else "│   "
            self._print_tree_recursive(child, prefix + extension)


def build_tree(results: RigidResults, config: Config | None = None) -> RigidNode:
    """
    Run the whole cleaning pipeline and return the root of the tree
    """
    return TreeBuilder(results, config).root
