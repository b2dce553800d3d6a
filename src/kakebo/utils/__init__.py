"""Utility functions for kakebo."""

from kakebo.utils.date_parser import parse_date
from kakebo.utils.amount_parser import parse_amount, parse_percentages

__all__ = ["parse_date", "parse_amount", "parse_percentages"]
