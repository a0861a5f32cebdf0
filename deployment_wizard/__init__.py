"""Deployment Wizard - guided, validated deployment requests."""

__version__ = "0.1.0"
