"""issueclass command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``issueclass`` script).
"""

from issueclass.cli.main import cli

__all__ = ["cli"]
