"""Package manifest loading.

This module decodes declarative manifest documents into typed models.
It feeds the archive build plan and the dependency update loop.
"""
