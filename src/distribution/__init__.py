"""Package distribution flows.

This module sequences manifest parsing, archive building, transfers,
and extraction for the create and update commands.
"""
