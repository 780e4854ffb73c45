"""Benchmarking subsystem for puzzlebench.

Provides tools for repeatedly timing candidate solutions under a time
budget, summarizing the samples with streaming statistics, and ranking
several candidates against each other.
"""
