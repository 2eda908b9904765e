#!/usr/bin/env python3

"""
Configuration for the annotation workspace provisioner.

This module handles:
- Profile loading and validation (optional YAML configuration file)
- Reading the ambient environment exactly once
- Merging CLI flags, profile values, environment and built-in defaults

Precedence, highest first: CLI flag, profile, environment, default.
"""

import os
import getpass
from dataclasses import dataclass, field
import yaml
from anno_workspace.errors import UsageError


DEFAULT_CODE_ROOT = "/nfs/production/flicek/ensembl/genebuild/{user}/annotations"
DEFAULT_DATA_ROOT = "/hps/nobackup/flicek/ensembl/genebuild/{user}/annotations"
DEFAULT_JOB_QUEUE = "short"

DEFAULT_REGISTRY_DATABASE = "gb_assembly_registry"
DEFAULT_REGISTRY_USER = "ensro"
# the assembly registry lives on the first genebuild server
REGISTRY_SERVER = 1

# repositories that get their own branch and linked worktree: (name, base reference)
DEFAULT_MUTABLE_REPOSITORIES = [
    ("ensembl-analysis", "origin/experimental/gbiab"),
    ("ensembl-genes", "main"),
]

# repositories shared read-only with the central ENSCODE checkout
DEFAULT_READONLY_REPOSITORIES = [
    "ensembl",
    "ensembl-io",
    "ensembl-production",
    "ensembl-hive",
    "ensembl-compara",
    "ensembl-killlist",
    "ensembl-taxonomy",
    "ensembl-variation",
    "ensembl-datacheck",
    "ensembl-metadata",
    "ensembl-orm",
]

PIPELINE_CONFIG_TEMPLATE = "ensembl-analysis/modules/Bio/EnsEMBL/Analysis/Hive/Config/EnsemblAnno_conf.pm"
PROCESS_GCA_RUNNABLE = "ensembl-analysis/modules/Bio/EnsEMBL/Analysis/Hive/RunnableDB/ProcessGCA.pm"

SERVER_COUNT = 7

PROFILE_KEYS = {
    'enscode_directory',
    'code_root',
    'data_root',
    'job_queue',
    'registry_host',
    'registry_port',
    'registry_user',
    'registry_password',
    'registry_database',
    'mutable_repositories',
    'readonly_repositories',
    'server_set',
    'ehive_url',
    'ehive_pass',
}


@dataclass
class ProvisionerConfig:
    """Every value the provisioning stages read, resolved once at startup."""

    enscode_directory: str
    user: str
    code_root: str
    data_root: str
    job_queue: str = DEFAULT_JOB_QUEUE
    registry_host: str = ""
    registry_port: int = 0
    registry_user: str = DEFAULT_REGISTRY_USER
    registry_password: str = ""
    registry_database: str = DEFAULT_REGISTRY_DATABASE
    mutable_repositories: list = field(default_factory=lambda: list(DEFAULT_MUTABLE_REPOSITORIES))
    readonly_repositories: list = field(default_factory=lambda: list(DEFAULT_READONLY_REPOSITORIES))
    pipeline_config_template: str = PIPELINE_CONFIG_TEMPLATE
    runnable_path: str = PROCESS_GCA_RUNNABLE
    servers: dict = field(default_factory=dict)
    server_set: str = ""
    ehive_url: str = ""
    ehive_pass: str = ""


def load_profile(profile_path):
    """Load and validate a profile YAML file.

    Returns:
        dict: Profile values, empty if the file is empty
    """
    if not os.path.isfile(profile_path):
        raise UsageError(f"profile file not found: {profile_path}")

    with open(profile_path, "r") as file:
        try:
            profile_data = yaml.safe_load(file) or {}
        except yaml.YAMLError as e:
            raise UsageError(f"invalid profile {profile_path}: {e}")

    if not isinstance(profile_data, dict):
        raise UsageError(f"profile file must contain a mapping: {profile_path}")

    unknown = sorted(set(profile_data) - PROFILE_KEYS)
    if unknown:
        raise UsageError(f"unknown profile field(s) in {profile_path}: {', '.join(unknown)}")

    if 'mutable_repositories' in profile_data:
        repositories = []
        for entry in profile_data['mutable_repositories']:
            if not isinstance(entry, dict) or 'name' not in entry or 'base' not in entry:
                raise UsageError("each mutable_repositories entry needs 'name' and 'base' fields")
            repositories.append((str(entry['name']), str(entry['base'])))
        profile_data['mutable_repositories'] = repositories

    return profile_data


def read_servers(environ):
    """
    Collect the genebuild database servers from GBS<n>/GBP<n> variables.

    Returns:
        dict: {n: (host, port)} for every pair that is at least partly set
    """
    servers = {}
    for number in range(1, SERVER_COUNT + 1):
        host = environ.get(f"GBS{number}", "")
        port = environ.get(f"GBP{number}", "")
        if host or port:
            servers[number] = (host, port)
    return servers


def _text(value, default=""):
    """Profile and environment scalars as strings; YAML may hand back numbers."""
    if value is None or value == "":
        return default
    return str(value)


def _port(value, source):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise UsageError(f"invalid registry port from {source}: {value!r}")


def build_config(enscode_directory=None, profile_path=None, environ=None):
    """
    Resolve the provisioner configuration.

    Args:
        enscode_directory (str): Value of --enscode_directory, if given
        profile_path (str): Path to a YAML profile, if given
        environ (dict): Environment to read; defaults to os.environ

    Returns:
        ProvisionerConfig: The resolved configuration

    Raises:
        UsageError: If no ENSCODE directory or registry server can be found
    """
    if environ is None:
        environ = os.environ
    environ = dict(environ)
    profile = load_profile(profile_path) if profile_path else {}

    enscode_directory = enscode_directory or _text(profile.get('enscode_directory')) or environ.get('ENSCODE')
    if not enscode_directory:
        raise UsageError("no ENSCODE directory path provided and the ENSCODE environment variable is not set")

    user = environ.get('USER') or getpass.getuser()
    servers = read_servers(environ)

    registry_host, registry_port = servers.get(REGISTRY_SERVER, ("", ""))
    port_source = f"GBP{REGISTRY_SERVER}"
    if profile.get('registry_host'):
        registry_host = str(profile['registry_host'])
    if profile.get('registry_port'):
        registry_port = profile['registry_port']
        port_source = "profile"
    if not registry_host or not registry_port:
        raise UsageError(f"no assembly registry server: set GBS{REGISTRY_SERVER} and GBP{REGISTRY_SERVER} or registry_host and registry_port in the profile")

    config = ProvisionerConfig(
        enscode_directory=os.path.abspath(enscode_directory),
        user=user,
        code_root=_text(profile.get('code_root'), DEFAULT_CODE_ROOT.format(user=user)),
        data_root=_text(profile.get('data_root'), DEFAULT_DATA_ROOT.format(user=user)),
        job_queue=_text(profile.get('job_queue'), DEFAULT_JOB_QUEUE),
        registry_host=registry_host,
        registry_port=_port(registry_port, port_source),
        registry_user=_text(profile.get('registry_user'), DEFAULT_REGISTRY_USER),
        registry_password=_text(profile.get('registry_password')),
        registry_database=_text(profile.get('registry_database'), DEFAULT_REGISTRY_DATABASE),
        servers=servers,
        server_set=_text(profile.get('server_set'), environ.get('SERVER_SET', "")),
        ehive_url=_text(profile.get('ehive_url'), environ.get('EHIVE_URL', "")),
        ehive_pass=_text(profile.get('ehive_pass'), environ.get('EHIVE_PASS', "")),
    )
    if profile.get('mutable_repositories'):
        config.mutable_repositories = profile['mutable_repositories']
    if profile.get('readonly_repositories'):
        config.readonly_repositories = [str(repository) for repository in profile['readonly_repositories']]
    return config
