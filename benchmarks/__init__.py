"""Benchmarks for dfopt.

Runs every strategy against the standard test objectives and reports the
best point found, its quality and the number of objective evaluations.
"""
