"""Utility functions for spendtab."""

from spendtab.utils.amount_parser import parse_amount

__all__ = ["parse_amount"]
