#!/usr/bin/env python3

"""
Exception types raised by the provisioning stages.

Stages raise these and never exit the process themselves; the CLI decides
how each one is reported.
"""


class ProvisionerError(Exception):
    """Base class for every provisioning failure."""


class UsageError(ProvisionerError):
    """Missing or invalid input, detected before any side effect."""


class AccessionNotFoundError(ProvisionerError, LookupError):
    """The assembly accession has no row in the assembly registry."""

    def __init__(self, assembly_accession):
        self.assembly_accession = assembly_accession
        super().__init__(f"assembly accession {assembly_accession} not in the assembly registry database")


class ToolError(ProvisionerError):
    """
    An external tool or filesystem operation failed.

    Args:
        command (list): The command that was run
        returncode (int): Exit status of the command
    """

    def __init__(self, command, returncode, message=None):
        self.command = list(command)
        self.returncode = returncode
        if message is None:
            message = f"command failed with exit status {returncode}: {' '.join(self.command)}"
        super().__init__(message)


class TemplateError(ToolError):
    """A literal placeholder was not found in the file being edited."""

    def __init__(self, path, pattern):
        self.path = str(path)
        self.pattern = pattern
        super().__init__(["replace", pattern, self.path], 1, f"placeholder not found in {self.path}: {pattern}")
