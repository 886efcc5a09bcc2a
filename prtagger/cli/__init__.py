# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
pr-tagger command line interface

Usage:
    pr-tagger --tag <label> [--paths <globs>] [--dry-run]
"""
