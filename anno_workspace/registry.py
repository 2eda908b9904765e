#!/usr/bin/env python3

"""
Assembly registry lookups.

The scientific name of an assembly is taken from the genebuild assembly
registry so that every annotation of the same assembly is named the same way.
"""

import pymysql
from anno_workspace.errors import AccessionNotFoundError, ToolError
from anno_workspace.logging_utils import log_info
from anno_workspace.utils import split_accession


SCIENTIFIC_NAME_QUERY = """
    SELECT meta.subspecies_name
    FROM assembly
    INNER JOIN meta
      ON assembly.assembly_id = meta.assembly_id
    WHERE assembly.chain = %s
      AND assembly.version = %s
"""


def get_scientific_name(config, assembly_accession):
    """
    Look up the species scientific name of an assembly in the registry.

    Args:
        config (ProvisionerConfig): Registry connection settings
        assembly_accession (str): Accession such as "GCA_000001.1"

    Returns:
        str: The scientific name with surrounding whitespace removed

    Raises:
        AccessionNotFoundError: If the registry has no matching assembly
        ToolError: If the registry cannot be reached or the query fails
    """
    chain, version = split_accession(assembly_accession)
    log_info(f"Looking up {assembly_accession} in {config.registry_database} on {config.registry_host}:{config.registry_port}")

    try:
        conn = pymysql.connect(
            host=config.registry_host,
            user=config.registry_user,
            password=config.registry_password,
            port=config.registry_port,
            database=config.registry_database,
        )
        try:
            with conn.cursor() as cursor:
                cursor.execute(SCIENTIFIC_NAME_QUERY, (chain, version))
                row = cursor.fetchone()
        finally:
            conn.close()
    except pymysql.Error as err:
        raise ToolError(["mysql", config.registry_database], 1, f"assembly registry query failed on {config.registry_host}:{config.registry_port}: {err}") from err

    if not row or row[0] is None or not str(row[0]).strip():
        raise AccessionNotFoundError(assembly_accession)

    scientific_name = str(row[0]).strip()
    log_info(f"scientific name:\n{scientific_name}")
    return scientific_name
