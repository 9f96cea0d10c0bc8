"""State layer.

Holds the lazily loaded datasets and the memoized answers.  These are the
only mutable objects shared between requests.
"""
