#!/usr/bin/env python3
"""
Copy Pocket Ledger settings from a .env file into AWS Parameter Store.

Each configuration key is read from its environment variable name
(``supabase/service-role-key`` from ``SUPABASE_SERVICE_ROLE_KEY``) and written
under the prefix. Secrets are stored as SecureString.
"""

import sys
from pathlib import Path
from typing import Dict

import boto3
import click
from botocore.exceptions import ClientError
from dotenv import dotenv_values

from services.parameter_store import CONFIG_KEYS, SECRET_KEYS, env_var_name


def collect_parameters(env_file: str) -> Dict[str, str]:
    """Configuration keys that have a non-empty value in ``env_file``."""
    values = dotenv_values(env_file)
    parameters = {}
    for key in CONFIG_KEYS:
        value = values.get(env_var_name(key))
        if value:
            parameters[key] = value
    return parameters


def mask(value: str) -> str:
    return value[:6] + "..." if len(value) > 6 else "***"


def upload_parameters(
    ssm, parameters: Dict[str, str], prefix: str, dry_run: bool = False
) -> int:
    """Write parameters; returns the number of failed uploads."""
    failures = 0
    for key, value in parameters.items():
        name = f"{prefix}/{key}"
        secret = key in SECRET_KEYS

        if dry_run:
            click.echo(f"  {name} = {mask(value) if secret else value}")
            continue

        try:
            response = ssm.put_parameter(
                Name=name,
                Value=value,
                Type="SecureString" if secret else "String",
                Overwrite=True,
            )
            click.secho(f"Uploaded {name} (version {response['Version']})", fg="green")
        except ClientError as e:
            failures += 1
            click.secho(f"Failed to upload {name}: {e}", fg="red", err=True)
    return failures


@click.command()
@click.option("--env-file", default=".env", help="Path to .env file", show_default=True)
@click.option(
    "--prefix", default="/pocket-ledger", help="Parameter Store prefix", show_default=True
)
@click.option(
    "--dry-run", is_flag=True, help="Show what would be uploaded without uploading"
)
def main(env_file: str, prefix: str, dry_run: bool):
    """Upload Supabase and AI settings from ENV_FILE to Parameter Store."""
    if not Path(env_file).exists():
        click.secho(f"Error: {env_file} file not found", fg="red", err=True)
        sys.exit(1)

    parameters = collect_parameters(env_file)
    if not parameters:
        click.secho("No configuration values found to upload", fg="red", err=True)
        sys.exit(1)

    missing = [key for key in CONFIG_KEYS if key not in parameters]
    if missing:
        click.secho(f"Not set, skipping: {', '.join(missing)}", fg="yellow")

    if dry_run:
        click.secho("DRY RUN - would upload:", fg="blue")
        upload_parameters(None, parameters, prefix.rstrip("/"), dry_run=True)
        return

    failures = upload_parameters(
        boto3.client("ssm"), parameters, prefix.rstrip("/")
    )
    if failures:
        sys.exit(1)
    click.secho(f"Uploaded {len(parameters)} parameters under {prefix}", fg="green")


if __name__ == "__main__":
    main()
