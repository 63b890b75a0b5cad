from __future__ import annotations
import os
import json
from .rigid import JointType


class Config:
    """
    Options of the rigid tree resolution, read from a JSON file and/or
    overridden with keyword arguments
    """

    def __init__(self, config_file: str | None = None, **overrides):
        self.config_file: str | None = config_file
        self.config: dict = {}

        if config_file is not None:
            if os.path.isdir(config_file):
                config_file = os.path.join(config_file, "config.json")
                self.config_file = config_file
            if not os.path.exists(config_file):
                raise Exception(f"ERROR: config file {config_file} not found")
            with open(config_file, "r", encoding="utf-8") as stream:
                self.config = json.load(stream)

        self.config.update(overrides)

        # Printing progress and diagnostics on the console
        self.verbose: bool = self.get("verbose", True)
        # Groups unreachable from the ground are dropped (True) or an error (False)
        self.allow_disconnected: bool = self.get("allow_disconnected", True)
        # Print the resulting tree
        self.print_tree: bool = self.get("print_tree", False)
        # Joint type tags that do not allow any motion
        self.rigid_joint_types: list = self.get(
            "rigid_joint_types", [JointType.RIGID], types=(list, tuple)
        )

    def get(self, name: str, default=None, required: bool = False, types=None):
        """
        Gets an entry from the configuration

        Args:
            name (str): entry name
            default: default fallback value if the entry is not present
            required (bool): whether the configuration entry is required
            types: accepted types, defaults to the type of the default value
        """
        if name not in self.config:
            if required:
                raise Exception(
                    f"ERROR: missing required key {name} in {self.config_file}"
                )
            return default

        value = self.config[name]
        if types is None and default is not None:
            types = type(default)
        if types is not None and not isinstance(value, types):
            raise Exception(
                f"ERROR: {name} should be of type {types}, got {type(value).__name__}"
            )

        return value
