"""Tiered water bill calculation: tariffs, allocation, bill and year comparison."""
