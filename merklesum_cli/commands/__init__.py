"""
CLI command modules.
"""

from merklesum_cli.commands import root, prove

__all__ = ["root", "prove"]
