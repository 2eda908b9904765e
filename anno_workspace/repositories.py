#!/usr/bin/env python3

"""
Source tree materialization for an annotation.

This module handles:
- Per-annotation branches and linked worktrees for the repositories the
  annotation modifies
- Symbolic links to the shared ENSCODE checkout for everything else
"""

import os
from anno_workspace.errors import ToolError
from anno_workspace.logging_utils import log_info
from anno_workspace.utils import run_command


def create_worktree(repository_directory, branch, base, worktree_path):
    """
    Create a fresh branch from a base reference and check it out in a linked worktree.

    A branch left behind by an earlier run with the same name is deleted first.

    Args:
        repository_directory (str): Main clone of the repository
        branch (str): Branch name, the annotation name
        base (str): Reference the branch starts from
        worktree_path (str): Where the linked worktree goes
    """
    run_command(["git", "worktree", "prune"], cwd=repository_directory)
    # a missing branch is fine here
    run_command(["git", "branch", "-D", branch], cwd=repository_directory, check=False, quiet=True)
    run_command(["git", "branch", branch, base], cwd=repository_directory)
    run_command(["git", "worktree", "add", worktree_path, branch], cwd=repository_directory)


def link_repositories(enscode_directory, annotation_enscode_directory, repositories):
    """
    Symlink shared repositories into the annotation enscode directory.

    Args:
        enscode_directory (str): Central ENSCODE directory
        annotation_enscode_directory (str): The annotation's enscode directory
        repositories (list): Repository names

    Returns:
        list: Paths of the created links
    """
    links = []
    for repository in repositories:
        target = os.path.join(enscode_directory, repository)
        link = os.path.join(annotation_enscode_directory, repository)
        try:
            os.symlink(target, link)
        except OSError as e:
            raise ToolError(["ln", "--symbolic", target, link], 1, f"failed to create symbolic link '{link}': {e.strerror}") from e
        log_info(f"'{link}' -> '{target}'")
        links.append(link)
    return links


def materialize_source_tree(config, annotation_name, paths):
    """
    Populate the annotation enscode directory.

    Args:
        config (ProvisionerConfig): Repository lists and the ENSCODE directory
        annotation_name (str): Branch name for the modified repositories
        paths (WorkspacePaths): Annotation directories
    """
    for repository, base in config.mutable_repositories:
        log_info(f"Creating branch {annotation_name} of {repository} from {base}")
        create_worktree(
            os.path.join(config.enscode_directory, repository),
            annotation_name,
            base,
            os.path.join(paths.enscode_directory, repository),
        )

    link_repositories(config.enscode_directory, paths.enscode_directory, config.readonly_repositories)
