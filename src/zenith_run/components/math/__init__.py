"""Arithmetic components."""

from .sum import Sum, SumSpec, sum_numbers

__all__ = ["Sum", "SumSpec", "sum_numbers"]
