"""
Performance Review Score Engine

Computes, locks and delivers per-employee final performance scores for a
review cycle, and governs post-lock score adjustments.
"""

__version__ = "1.0.0"
