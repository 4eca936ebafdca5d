"""projsort CLI - detect projects and sort them by type.

Uses tyro for type-driven CLI generation from dataclasses.
"""

from __future__ import annotations

from typing import Annotated

import tyro

from projsort.cli.commands.config import ConfigSet, ConfigShow, ConfigUnset
from projsort.cli.commands.scan import Scan
from projsort.cli.commands.sort import Sort

# Type aliases for subcommand annotations
_Scan = Annotated[Scan, tyro.conf.subcommand("scan")]
_Sort = Annotated[Sort, tyro.conf.subcommand("sort")]

# Config subcommands
_ConfigShow = Annotated[ConfigShow, tyro.conf.subcommand("config:show")]
_ConfigSet = Annotated[ConfigSet, tyro.conf.subcommand("config:set")]
_ConfigUnset = Annotated[ConfigUnset, tyro.conf.subcommand("config:unset")]

Command = _Scan | _Sort | _ConfigShow | _ConfigSet | _ConfigUnset


def main(args: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    # configure structlog (respects PROJSORT_DEBUG env var)
    from projsort.logging_config import configure_logging

    configure_logging()

    try:
        cmd = tyro.cli(
            Command,
            prog="projsort",
            description="Detect projects in a directory tree and sort them "
            "into per-type destinations.",
            args=args,
        )
        return cmd.run()
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        from projsort import console

        console.error(str(e))
        return 1
