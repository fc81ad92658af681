"""Constant tables shared across Skillint modules."""
