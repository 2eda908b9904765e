#!/usr/bin/env python3

"""
Annotation environment script.

Writes environment.sh to the annotation log directory. It is sourced before
running the pipeline; CLADE and any blank eHive values are filled in by hand.
"""

import os
import shlex
import textwrap
from anno_workspace.config import SERVER_COUNT
from anno_workspace.logging_utils import log_info


ENVIRONMENT_FILENAME = "environment.sh"


def get_environment(workspace):
    """
    Collect the variables exported by the environment script.

    Args:
        workspace (AnnotationWorkspace): The provisioned annotation

    Returns:
        dict: Variable name to value, in export order
    """
    config = workspace.config
    paths = workspace.paths
    enscode = paths.enscode_directory

    environment = {
        'ASSEMBLY_ACCESSION': workspace.assembly_accession,
        'SCIENTIFIC_NAME': workspace.scientific_name,
        'CLADE': '',
        'ANNOTATION_NAME': workspace.annotation_name,
        'ANNOTATION_CODE_DIRECTORY': paths.code_directory,
        'ANNOTATION_LOG_DIRECTORY': paths.log_directory,
        'ANNOTATION_DATA_DIRECTORY': paths.data_directory,
        'ENSCODE': enscode,
        'SERVER_SET': config.server_set,
        'EHIVE_URL': config.ehive_url,
        'EHIVE_PASS': config.ehive_pass,
    }
    for number in range(1, SERVER_COUNT + 1):
        host, port = config.servers.get(number, ('', ''))
        environment[f'GBS{number}'] = host
        environment[f'GBP{number}'] = str(port)
    return environment


def get_search_paths(workspace):
    """
    Library search path entries for the annotation enscode directory.

    Returns:
        dict: PERL5LIB, PYTHONPATH and PATH entries to prepend
    """
    repositories = [name for name, _ in workspace.config.mutable_repositories] + list(workspace.config.readonly_repositories)
    enscode = workspace.paths.enscode_directory

    perl5lib = []
    for repository in repositories:
        perl5lib.append(os.path.join(enscode, repository, "modules"))
    perl5lib.append(os.path.join(enscode, "ensembl-hive", "modules"))

    pythonpath = [os.path.join(enscode, "ensembl-genes", "src", "python")]
    path = [os.path.join(enscode, "ensembl-hive", "scripts")]

    return {
        'PERL5LIB': list(dict.fromkeys(perl5lib)),
        'PYTHONPATH': pythonpath,
        'PATH': path,
    }


def render_environment(workspace):
    """Render the text of the environment script."""
    lines = [
        "#!/usr/bin/env bash",
        "",
        textwrap.dedent(f"""\
            # Environment for the {workspace.annotation_name} annotation.
            # source this file before running the pipeline:
            #     source {os.path.join(workspace.paths.log_directory, ENVIRONMENT_FILENAME)}"""),
        "",
    ]
    for name, value in get_environment(workspace).items():
        lines.append(f"export {name}={shlex.quote(value)}")

    lines.append("")
    for name, entries in get_search_paths(workspace).items():
        joined = ":".join(shlex.quote(entry) for entry in entries)
        lines.append(f'export {name}={joined}${{{name}:+:${name}}}')
    lines.append("")
    return "\n".join(lines)


def write_environment(workspace):
    """
    Write environment.sh to the annotation log directory.

    Returns:
        str: Path of the written script
    """
    path = os.path.join(workspace.paths.log_directory, ENVIRONMENT_FILENAME)
    with open(path, 'w') as env_file:
        env_file.write(render_environment(workspace))
    log_info(f"environment script:\n{path}")
    return path
