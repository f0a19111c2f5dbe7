"""Boundary validation of raw household billing values."""
