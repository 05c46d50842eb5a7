"""
CLI package for git-promote.
"""

from .main import create_cli_group, main

__all__ = ['create_cli_group', 'main']
