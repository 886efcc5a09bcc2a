# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Workflow run tagging pipeline

Stages, in order:
    context   - load the run and resolve the effective branch
    baseline  - find the last successful run of the same workflow
    commits   - compare baseline..head and filter by changed paths
    tagging   - label each distinct pull request once
"""

from .pipeline import run

__all__ = ['run']
