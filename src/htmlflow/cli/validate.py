"""CLI command: htmlflow validate -- check an existing clipboard document."""

from __future__ import annotations

import json
import sys
from collections import Counter
from pathlib import Path
from typing import IO

import click

from htmlflow.model.diagnostic import Severity
from htmlflow.validation import validate as run_validate


@click.command()
@click.argument("document", type=click.File("r", encoding="utf-8"))
def validate(document: IO[str]) -> None:
    """Check a clipboard document JSON file (``-`` for stdin).

    Diagnostics go to stdout, one per line, followed by a count line. The
    exit code is 1 when any diagnostic is an error.
    """
    name = Path(document.name).name
    try:
        data = json.load(document)
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"Parse error in {name}: {exc}") from exc

    diagnostics = run_validate(data)
    for diag in diagnostics:
        click.echo(str(diag))

    counts = Counter(d.severity for d in diagnostics)
    status = "invalid" if counts[Severity.ERROR] else "valid"
    click.echo(
        f"{name}: {status} ({counts[Severity.ERROR]} error(s), "
        f"{counts[Severity.WARNING]} warning(s), {counts[Severity.INFO]} info)"
    )
    if counts[Severity.ERROR]:
        sys.exit(1)
