"""Package archive construction and extraction.

This module packs manifest targets into zip archives and unpacks them.
Both directions share one archive naming rule.
"""
