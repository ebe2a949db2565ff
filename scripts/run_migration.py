#!/usr/bin/env python3
"""
Run a SQL migration against the Supabase project.

The SQL is sent to the ``exec_sql`` database function with the service-role
key. Reads ``SUPABASE_URL`` (or ``NEXT_PUBLIC_SUPABASE_URL``) and
``SUPABASE_SERVICE_ROLE_KEY`` from the environment or a ``.env`` file.
"""

import os
import sys
from pathlib import Path

import click
import requests
from dotenv import load_dotenv


def run_migration(url: str, service_role_key: str, sql: str) -> requests.Response:
    return requests.post(
        f"{url.rstrip('/')}/rest/v1/rpc/exec_sql",
        json={"query": sql},
        headers={
            "apikey": service_role_key,
            "Authorization": f"Bearer {service_role_key}",
            "Content-Type": "application/json",
        },
        timeout=60,
    )


@click.command()
@click.argument("sql_file", type=click.Path())
def main(sql_file: str):
    """Apply SQL_FILE to the configured Supabase database."""
    load_dotenv()
    url = os.getenv("SUPABASE_URL") or os.getenv("NEXT_PUBLIC_SUPABASE_URL")
    service_role_key = os.getenv("SUPABASE_SERVICE_ROLE_KEY")

    if not url or not service_role_key:
        click.secho(
            "Missing Supabase URL or service role key in environment variables",
            fg="red",
            err=True,
        )
        sys.exit(1)

    path = Path(sql_file)
    if not path.is_file():
        click.secho(f"Error: {sql_file} not found", fg="red", err=True)
        sys.exit(1)

    click.echo(f"Running migration from: {sql_file}")
    try:
        response = run_migration(url, service_role_key, path.read_text(encoding="utf-8"))
    except Exception as e:
        click.secho(f"Error running migration: {e}", fg="red", err=True)
        sys.exit(1)

    if not response.ok:
        click.secho(
            f"Migration error ({response.status_code}): {response.text}",
            fg="red",
            err=True,
        )
        sys.exit(1)

    click.secho("Migration completed successfully", fg="green")


if __name__ == "__main__":
    main()
