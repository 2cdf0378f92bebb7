"""Entry point for `python -m issueclass`.

Usage:
    python -m issueclass run 7 --start 1000 --end 2000
"""

from __future__ import annotations

from issueclass.cli import cli

cli(prog_name="issueclass")
