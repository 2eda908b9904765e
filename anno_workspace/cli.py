#!/usr/bin/env python3

"""
Command line interface for the annotation workspace provisioner.
"""

import sys
import argparse
import textwrap
from anno_workspace.config import build_config
from anno_workspace.errors import AccessionNotFoundError, ToolError, UsageError
from anno_workspace.logging_utils import log_error, setup_logging
from anno_workspace.provisioner import provision


def get_parser():
    parser = argparse.ArgumentParser(
                        prog='anno-setup',
                        description=textwrap.dedent('''
                                            Create an annotation code directory populated with code dependencies and
                                            development environment setup scripts for the Anno annotation of the genome assembly
                                            with the specified (GenBank) assembly accession.'''),
                        usage='anno-setup [-a|--assembly_accession] <assembly accession> [-e|--enscode_directory <ENSCODE directory>] [-d|--directory <annotation code directory>]',
                        formatter_class=argparse.RawTextHelpFormatter,
                        epilog=textwrap.dedent('''
                                            Outputs:
                                            - {directory}/enscode: linked worktrees of ensembl-analysis and ensembl-genes, symlinks to the other repositories
                                            - {directory}/annotation/EnsemblAnno_conf.pm: the pipeline configuration
                                            - {directory}/annotation/environment.sh: environment to source before running the pipeline
                                            - {data root}/{annotation name}: the group writable annotation data directory
                                            '''))
    parser.add_argument('accession', nargs='?', help='Assembly accession, if -a is not used')
    parser.add_argument('-a', '--assembly_accession', help='GenBank assembly accession (e.g. GCA_000001405.15)')
    parser.add_argument('-e', '--enscode_directory', help='Path of the centralized ENSCODE directory. Uses the ENSCODE environment variable by default.')
    parser.add_argument('-d', '--directory', help='Path for the annotation code directory. Defaults to\n{code root}/<Scientific_name>-<assembly accession>.')
    parser.add_argument('-p', '--profile', help='Optional: YAML profile overriding the default roots, queue, registry and repositories.')
    parser.add_argument('-q', '--quiet', action='store_true', help='Quiet mode: only show warnings and errors.')
    return parser


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    parser = get_parser()

    # print help if run without arguments
    if not argv:
        parser.print_help()
        raise SystemExit(2)

    args = parser.parse_args(argv)
    setup_logging(quiet=args.quiet)

    assembly_accession = args.assembly_accession or args.accession
    try:
        if not assembly_accession:
            raise UsageError("no assembly accession provided")
        config = build_config(enscode_directory=args.enscode_directory, profile_path=args.profile)
        provision(config, assembly_accession, code_directory=args.directory)
    except UsageError as e:
        log_error(str(e))
        parser.print_help(sys.stderr)
        raise SystemExit(2)
    except AccessionNotFoundError as e:
        log_error(str(e))
        raise SystemExit(1)
    except ToolError as e:
        log_error(str(e))
        raise SystemExit(e.returncode or 1)


if __name__ == "__main__":
    main()
