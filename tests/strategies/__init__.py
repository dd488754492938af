"""Hypothesis strategies shared across the test suite."""
