#!/usr/bin/env python3

"""
Pipeline configuration templating and runnable patching.

The eHive configuration is a Perl module, so values are written by replacing
the exact placeholder lines of the template:
- Pipeline configuration: EnsemblAnno_conf.pm copied to the log directory
- Runnable patch: ProcessGCA.pm in the annotation's own worktree
"""

import os
import shutil
from anno_workspace.errors import ToolError
from anno_workspace.logging_utils import log_info
from anno_workspace.utils import get_production_name, replace_in_file


BASE_OUTPUT_DIR_PLACEHOLDER = "'base_output_dir'              => '',"
PRODUCTION_NAME_PLACEHOLDER = "'production_name'              => '',"
INPUT_IDS_PLACEHOLDER = "-input_ids         => [],"

CURRENT_GENEBUILD_PARAM = "my $current_genebuild = $self->param('current_genebuild');"
CURRENT_GENEBUILD_DEFAULT = "#my $current_genebuild  = 0;"


def get_config_replacements(assembly_accession, scientific_name, data_directory):
    """
    Build the placeholder substitutions for the pipeline configuration.

    Returns:
        list: (placeholder, value) pairs
    """
    production_name = get_production_name(scientific_name, assembly_accession)
    return [
        (BASE_OUTPUT_DIR_PLACEHOLDER, f"'base_output_dir'              => '{data_directory}',"),
        (PRODUCTION_NAME_PLACEHOLDER, f"'production_name'              => '{production_name}',"),
        (INPUT_IDS_PLACEHOLDER, f"-input_ids         => [{{'assembly_accession' => '{assembly_accession}'}}],"),
    ]


def render_pipeline_config(template_path, output_path, assembly_accession, scientific_name, data_directory):
    """
    Copy the pipeline configuration template and fill in the annotation values.

    Args:
        template_path (str): EnsemblAnno_conf.pm in the annotation worktree
        output_path (str): Destination in the annotation log directory
        assembly_accession (str): Assembly accession
        scientific_name (str): Scientific name from the registry
        data_directory (str): Annotation data directory, the pipeline output directory

    Returns:
        str: output_path
    """
    try:
        shutil.copy2(template_path, output_path)
    except OSError as e:
        raise ToolError(["cp", "--preserve", template_path, output_path], 1, f"cannot copy '{template_path}': {e.strerror}") from e
    log_info(f"'{template_path}' -> '{output_path}'")

    replace_in_file(output_path, get_config_replacements(assembly_accession, scientific_name, data_directory))
    return output_path


def patch_runnable(runnable_path):
    """
    Make ProcessGCA treat the assembly as a current genebuild.

    Comments out the parameter lookup and enables the hardcoded value instead.

    Args:
        runnable_path (str): ProcessGCA.pm in the annotation worktree
    """
    if not os.path.isfile(runnable_path):
        raise ToolError(["sed", "--in-place", runnable_path], 2, f"can't read {runnable_path}: No such file or directory")
    replace_in_file(runnable_path, [
        (CURRENT_GENEBUILD_PARAM, f"#{CURRENT_GENEBUILD_PARAM}"),
        (CURRENT_GENEBUILD_DEFAULT, "my $current_genebuild  = 1;"),
    ])
    log_info(f"patched {runnable_path}")
