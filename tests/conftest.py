"""
Shared fixtures for the provisioner tests.
"""

import logging
import os
import shutil
import subprocess
import textwrap

import pytest

from anno_workspace import registry
from anno_workspace.config import (
    DEFAULT_MUTABLE_REPOSITORIES,
    DEFAULT_READONLY_REPOSITORIES,
    PIPELINE_CONFIG_TEMPLATE,
    PROCESS_GCA_RUNNABLE,
    ProvisionerConfig,
)


PIPELINE_CONFIG_TEXT = textwrap.dedent("""\
    package Bio::EnsEMBL::Analysis::Hive::Config::EnsemblAnno_conf;

    sub default_options {
      my ($self) = @_;
      return {
        %{ $self->SUPER::default_options() },
        'base_output_dir'              => '',
        'production_name'              => '',
        'user_r'                       => '',
        'release_number'               => '',
      };
    }

    sub pipeline_analyses {
      my ($self) = @_;
      return [
        {
          -logic_name => 'process_gca',
          -module     => 'Bio::EnsEMBL::Analysis::Hive::RunnableDB::ProcessGCA',
          -input_ids         => [],
        },
      ];
    }

    1;
    """)

PROCESS_GCA_TEXT = textwrap.dedent("""\
    sub fetch_input {
      my ($self) = @_;
      my $current_genebuild = $self->param('current_genebuild');
      #my $current_genebuild  = 0;
      $self->param('genebuild', $current_genebuild);
    }
    """)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop the stdout handler installed by setup_logging after each test."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)


class FakeCursor:
    def __init__(self, connection):
        self.connection = connection

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, query, params=None):
        self.connection.queries.append((query, params))

    def fetchone(self):
        chain, version = self.connection.queries[-1][1]
        return self.connection.rows.get(f"{chain}.{version}")


class FakeConnection:
    def __init__(self, rows, **kwargs):
        self.rows = rows
        self.kwargs = kwargs
        self.queries = []
        self.closed = False

    def cursor(self):
        return FakeCursor(self)

    def close(self):
        self.closed = True


@pytest.fixture
def registry_rows(monkeypatch):
    """
    Replace the registry connection with an in-memory table.

    Add rows as ``registry_rows["GCA_000001.1"] = ("Homo sapiens",)``.
    Connections made are appended to ``registry_rows.connections``.
    """
    class Rows(dict):
        pass

    rows = Rows()
    rows.connections = []

    def connect(**kwargs):
        connection = FakeConnection(rows, **kwargs)
        rows.connections.append(connection)
        return connection

    monkeypatch.setattr(registry.pymysql, "connect", connect)
    return rows


@pytest.fixture
def enscode(tmp_path):
    """A central ENSCODE directory with every default repository."""
    enscode_directory = tmp_path / "enscode"
    for repository, _ in DEFAULT_MUTABLE_REPOSITORIES:
        (enscode_directory / repository).mkdir(parents=True)
    for repository in DEFAULT_READONLY_REPOSITORIES:
        (enscode_directory / repository / "modules").mkdir(parents=True)

    template = enscode_directory / PIPELINE_CONFIG_TEMPLATE
    template.parent.mkdir(parents=True)
    template.write_text(PIPELINE_CONFIG_TEXT)
    runnable = enscode_directory / PROCESS_GCA_RUNNABLE
    runnable.parent.mkdir(parents=True)
    runnable.write_text(PROCESS_GCA_TEXT)
    return enscode_directory


@pytest.fixture
def config(tmp_path, enscode):
    return ProvisionerConfig(
        enscode_directory=str(enscode),
        user="genebuilder",
        code_root=str(tmp_path / "code" / "annotations"),
        data_root=str(tmp_path / "data" / "annotations"),
        registry_host="registry-host",
        registry_port=4527,
        servers={1: ("registry-host", "4527"), 2: ("core-host", "4528")},
        server_set="1",
    )


@pytest.fixture
def commands(monkeypatch):
    """
    Record external commands instead of running them.

    ``git worktree add <path> <branch>`` copies the repository to <path>,
    so later stages find the checked out files.
    """
    recorded = []

    def run(command, cwd=None, check=True, stdout=None, stderr=None):
        recorded.append((list(command), None if cwd is None else str(cwd)))
        if command[:3] == ["git", "worktree", "add"]:
            shutil.copytree(cwd, command[3])
        return subprocess.CompletedProcess(command, 0)

    monkeypatch.setattr(subprocess, "run", run)
    return recorded


def git_available():
    return shutil.which("git") is not None


def make_git_repository(path):
    """Create a repository with one commit on main."""
    path.mkdir(parents=True)
    env = dict(os.environ, GIT_AUTHOR_NAME="test", GIT_AUTHOR_EMAIL="test@example.org",
               GIT_COMMITTER_NAME="test", GIT_COMMITTER_EMAIL="test@example.org")
    subprocess.run(["git", "init", "--quiet"], cwd=path, check=True)
    subprocess.run(["git", "symbolic-ref", "HEAD", "refs/heads/main"], cwd=path, check=True)
    (path / "README").write_text("readme\n")
    subprocess.run(["git", "add", "README"], cwd=path, check=True)
    subprocess.run(["git", "-c", "commit.gpgsign=false", "commit", "--quiet", "-m", "init"], cwd=path, check=True, env=env)
    return path
