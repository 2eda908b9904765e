"""
Anno Workspace - Annotation workspace provisioner

This package sets up an isolated working directory for one Ensembl Anno
genome annotation run.

## Module Organization

- **utils**: Naming, placeholder substitution, external commands
- **logging_utils**: Logging configuration and helpers
- **errors**: Exception types
- **config**: Profile loading and configuration resolution
- **registry**: Assembly registry lookups
- **workspace**: Workspace paths and directories
- **repositories**: Worktrees and symlinks of the code repositories
- **scheduler**: LSF job submission
- **templating**: Pipeline configuration and runnable patching
- **environment**: Environment script generation
- **provisioner**: Stage coordination

## Main Scripts

- **cli**: The anno-setup command
"""

__version__ = "1.0.0"
__author__ = "Ensembl Genebuild"

from . import utils
from . import logging_utils
from . import errors
from . import config
from . import registry
from . import workspace
from . import repositories
from . import scheduler
from . import templating
from . import environment
from . import provisioner

__all__ = [
    'utils',
    'logging_utils',
    'errors',
    'config',
    'registry',
    'workspace',
    'repositories',
    'scheduler',
    'templating',
    'environment',
    'provisioner',
]
