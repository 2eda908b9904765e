#!/usr/bin/env python3

"""
General utility functions for the annotation workspace provisioner.

This module contains utilities for:
- Accession parsing and annotation naming
- Literal placeholder substitution in text files
- Running external commands
"""

import subprocess
from anno_workspace.errors import TemplateError, ToolError
from anno_workspace.logging_utils import log_command, log_warning


def split_accession(assembly_accession):
    """
    Split an assembly accession into its chain and version.

    Malformed accessions are not rejected here; a missing version comes back
    as an empty string and simply finds no registry row.

    Args:
        assembly_accession (str): Accession such as "GCA_000001.1"

    Returns:
        tuple: (chain, version)
    """
    parts = assembly_accession.split('.')
    chain = parts[0]
    version = parts[1] if len(parts) > 1 else ''
    return chain, version


def get_annotation_name(scientific_name, assembly_accession):
    """
    Build the annotation name used for branches and workspace directories.

    Args:
        scientific_name (str): Species scientific name, e.g. "Homo sapiens"
        assembly_accession (str): Assembly accession, e.g. "GCA_000001.1"

    Returns:
        str: e.g. "Homo_sapiens-GCA_000001.1"
    """
    return f"{scientific_name.replace(' ', '_')}-{assembly_accession}"


def get_production_name(scientific_name, assembly_accession):
    """
    Build the lowercase production name written to the pipeline config.

    Args:
        scientific_name (str): Species scientific name, e.g. "Homo sapiens"
        assembly_accession (str): Assembly accession, e.g. "GCA_000001.1"

    Returns:
        str: e.g. "homo_sapiens-gca_000001_1"
    """
    species = scientific_name.replace(' ', '_').lower()
    accession = assembly_accession.replace('.', '_').lower()
    return f"{species}-{accession}"


def replace_placeholder(filedata, placeholder, value, path='<text>'):
    """
    Replace every literal occurrence of a placeholder in a block of text.

    Args:
        filedata (str): Text to edit
        placeholder (str): Exact text to look for
        value (str): Replacement text
        path (str): File name used in messages

    Returns:
        str: The edited text

    Raises:
        TemplateError: If the placeholder does not occur at all
    """
    count = filedata.count(placeholder)
    if count == 0:
        raise TemplateError(path, placeholder)
    if count > 1:
        log_warning(f"{count} occurrences of {placeholder!r} replaced in {path}")
    return filedata.replace(placeholder, value)


def replace_in_file(path, replacements):
    """
    Apply literal substitutions to a file in place.

    Args:
        path (str or Path): File to edit
        replacements (list): (placeholder, value) pairs, applied in order
    """
    with open(path, 'r') as template_file:
        filedata = template_file.read()
    for placeholder, value in replacements:
        filedata = replace_placeholder(filedata, placeholder, value, path=str(path))
    with open(path, 'w') as output_file:
        output_file.write(filedata)


def run_command(command, cwd=None, check=True, quiet=False):
    """
    Run an external command, letting it write to the terminal.

    Args:
        command (list): Command and arguments
        cwd (str or Path): Working directory for the command
        check (bool): Raise on a non-zero exit status
        quiet (bool): Discard the command's output

    Returns:
        subprocess.CompletedProcess: The finished process

    Raises:
        ToolError: If the command cannot be started, or exits non-zero with check=True
    """
    command = [str(part) for part in command]
    log_command(command, cwd=cwd)
    output = subprocess.DEVNULL if quiet else None
    try:
        return subprocess.run(command, cwd=cwd, check=check, stdout=output, stderr=output)
    except subprocess.CalledProcessError as e:
        raise ToolError(command, e.returncode) from e
    except FileNotFoundError as e:
        raise ToolError(command, 127, f"command not found: {command[0]}") from e
