"""
Run configuration for the power evaluation.
"""

import logging
from argparse import Namespace
from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_DUMP_PATH = Path("mon_power.txt")


class PowerSettings(BaseModel):
    """Settings for one evaluation run, usually built from the command line."""

    bestiary_path: Path | None = Field(
        default=None,
        description="The bestiary JSON file to evaluate",
    )
    rebalance: bool = Field(
        default=False,
        description="Rewrite level, experience and rarity from the results",
    )
    dump: bool = Field(
        default=False,
        description="Write the pipe-delimited power dump",
    )
    dump_path: Path = Field(
        default=DEFAULT_DUMP_PATH,
        description="Where the power dump is written",
    )
    output_path: Path | None = Field(
        default=None,
        description="Where the evaluated bestiary is saved, if anywhere",
    )
    verbose: bool = Field(
        default=False,
        description="Log per-monster derivations",
    )
    show_table: bool = Field(
        default=False,
        description="Print the evaluated bestiary as a table",
    )

    @classmethod
    def from_args(cls, args: Namespace) -> "PowerSettings":
        """
        Builds the settings from parsed command line arguments.

        Args:
            args (Namespace): The parsed arguments.

        Returns:
            PowerSettings: The settings.

        """
        dump_path = getattr(args, "dump", None)
        return cls(
            bestiary_path=getattr(args, "bestiary", None),
            rebalance=getattr(args, "rebalance", False),
            dump=dump_path is not None,
            dump_path=dump_path or DEFAULT_DUMP_PATH,
            output_path=getattr(args, "output", None),
            verbose=getattr(args, "verbose", False),
            show_table=getattr(args, "table", False),
        )

    @property
    def log_level(self) -> int:
        return logging.DEBUG if self.verbose else logging.INFO
