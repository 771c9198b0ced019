"""Pytest configuration and shared fixtures."""

import matplotlib

# Headless backend for the plot tests; must be chosen before pyplot is imported.
matplotlib.use("Agg")
