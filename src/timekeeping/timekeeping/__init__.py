"""Timekeeping package.

This package is organized by feature modules (time_entries, summaries, clock,
corrections, team, ...) with a thin Flask controller layer on top of
framework-free service/repository layers.
"""
