#!/usr/bin/env python3

"""
Annotation workspace paths and directory creation.
"""

import os
from dataclasses import dataclass
from anno_workspace.errors import ToolError
from anno_workspace.logging_utils import log_info


@dataclass(frozen=True)
class WorkspacePaths:
    """Directories belonging to one annotation."""

    code_directory: str
    enscode_directory: str
    log_directory: str
    data_directory: str


def get_workspace_paths(config, annotation_name, code_directory=None):
    """
    Compute the workspace directories for an annotation.

    Args:
        config (ProvisionerConfig): Provides the code and data roots
        annotation_name (str): e.g. "Homo_sapiens-GCA_000001.1"
        code_directory (str): Explicit annotation code directory, overrides the default

    Returns:
        WorkspacePaths: The derived paths
    """
    if not code_directory:
        code_directory = os.path.join(config.code_root, annotation_name)
    code_directory = os.path.abspath(code_directory)
    return WorkspacePaths(
        code_directory=code_directory,
        enscode_directory=os.path.join(code_directory, "enscode"),
        log_directory=os.path.join(code_directory, "annotation"),
        data_directory=os.path.join(config.data_root, annotation_name),
    )


def create_code_directories(paths):
    """
    Create the annotation code, enscode and log directories.

    The code and enscode directories may already exist. The log directory
    may not: finding one means this annotation name was provisioned before.

    Args:
        paths (WorkspacePaths): Directories to create

    Raises:
        ToolError: If the log directory already exists or cannot be created
    """
    log_info(f"annotation code directory:\n{paths.code_directory}")
    try:
        os.makedirs(paths.enscode_directory, exist_ok=True)
    except OSError as e:
        raise ToolError(["mkdir", "--parents", paths.enscode_directory], 1, f"cannot create directory '{paths.enscode_directory}': {e.strerror}") from e
    log_info(f"created directory '{paths.enscode_directory}'")

    try:
        os.mkdir(paths.log_directory)
    except OSError as e:
        raise ToolError(["mkdir", paths.log_directory], 1, f"cannot create directory '{paths.log_directory}': {e.strerror}") from e
    log_info(f"created directory '{paths.log_directory}'")
