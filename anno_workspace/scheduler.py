#!/usr/bin/env python3

"""
Cluster job submission.

The data storage is only writable from the compute nodes, so the data
directory is created through interactive LSF jobs.
"""

from anno_workspace.logging_utils import log_info
from anno_workspace.utils import run_command


def submit_job(queue, command):
    """
    Run a command as an interactive LSF job and wait for it to finish.

    Args:
        queue (str): LSF queue name
        command (list): Command to run on the compute node
    """
    return run_command(["bsub", "-q", queue, "-Is"] + list(command))


def create_data_directory(config, data_directory):
    """
    Create the annotation data directory and make it group writable.

    Args:
        config (ProvisionerConfig): Provides the job queue
        data_directory (str): Directory to create
    """
    log_info(f"annotation data directory:\n{data_directory}")
    submit_job(config.job_queue, ["mkdir", "--parents", "--verbose", data_directory])
    # add write permission to file group
    submit_job(config.job_queue, ["chmod", "--verbose", "g+w", data_directory])
