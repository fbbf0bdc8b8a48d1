"""
status_ticker_core package.

Holds runtime plumbing for the status ticker application that does not
belong to the engine itself.
"""

__all__ = [
    "logger",
]
