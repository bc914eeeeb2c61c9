"""Gambit: chess rules engine with a depth-one evaluating AI."""

__version__ = "0.1.0"
