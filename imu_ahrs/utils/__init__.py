"""
Utility functions for the orientation filters.

This module provides the small numeric helpers used on the per-sample
update path of every filter.
"""

from .numeric import inv_sqrt

__all__ = [
    'inv_sqrt',
]
