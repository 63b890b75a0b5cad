from .rigid import JointType, PartOccurrence, JointEntry, RigidGroup, RigidJoint, RigidResults
from .skeleton import RigidNode, SkeletalJoint
from .cleaner import RigidCleaner, InvalidStateError, NoGroundError, DisconnectedError
from .config import Config
from .tree_builder import TreeBuilder, build_tree
