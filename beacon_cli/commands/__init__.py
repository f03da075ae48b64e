"""
CLI command modules.
"""

from beacon_cli.commands import check, prove, run

__all__ = ["check", "prove", "run"]
