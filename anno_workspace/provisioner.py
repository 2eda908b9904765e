#!/usr/bin/env python3

"""
Annotation workspace provisioning.

Runs the provisioning stages strictly in order. The first failure stops the
run; nothing already created is rolled back.
"""

import os
from dataclasses import dataclass
from anno_workspace.config import ProvisionerConfig
from anno_workspace.environment import write_environment
from anno_workspace.logging_utils import log_info
from anno_workspace.registry import get_scientific_name
from anno_workspace.repositories import materialize_source_tree
from anno_workspace.scheduler import create_data_directory
from anno_workspace.templating import patch_runnable, render_pipeline_config
from anno_workspace.utils import get_annotation_name
from anno_workspace.workspace import WorkspacePaths, create_code_directories, get_workspace_paths


PIPELINE_CONFIG_FILENAME = "EnsemblAnno_conf.pm"


@dataclass
class AnnotationWorkspace:
    """Summary of a provisioned annotation."""

    config: ProvisionerConfig
    assembly_accession: str
    scientific_name: str
    annotation_name: str
    paths: WorkspacePaths
    pipeline_config_path: str = ""
    environment_path: str = ""


def provision(config, assembly_accession, code_directory=None):
    """
    Create a complete annotation workspace for an assembly.

    Args:
        config (ProvisionerConfig): Resolved configuration
        assembly_accession (str): Assembly accession, e.g. "GCA_000001.1"
        code_directory (str): Explicit annotation code directory

    Returns:
        AnnotationWorkspace: What was created

    Raises:
        AccessionNotFoundError: Before any directory is created
        ToolError: If any later step fails
    """
    scientific_name = get_scientific_name(config, assembly_accession)
    annotation_name = get_annotation_name(scientific_name, assembly_accession)
    paths = get_workspace_paths(config, annotation_name, code_directory)

    workspace = AnnotationWorkspace(
        config=config,
        assembly_accession=assembly_accession,
        scientific_name=scientific_name,
        annotation_name=annotation_name,
        paths=paths,
    )

    create_code_directories(paths)
    materialize_source_tree(config, annotation_name, paths)
    create_data_directory(config, paths.data_directory)

    workspace.pipeline_config_path = render_pipeline_config(
        os.path.join(paths.enscode_directory, config.pipeline_config_template),
        os.path.join(paths.log_directory, PIPELINE_CONFIG_FILENAME),
        assembly_accession,
        scientific_name,
        paths.data_directory,
    )
    patch_runnable(os.path.join(paths.enscode_directory, config.runnable_path))
    workspace.environment_path = write_environment(workspace)

    log_info(f"\n✓ Annotation workspace ready for {annotation_name}")
    return workspace
