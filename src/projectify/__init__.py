"""Projectify - dependency graph and blast radius analysis for source trees."""

__version__ = "2.0.0"
