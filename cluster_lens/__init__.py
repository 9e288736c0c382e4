"""
Cluster-Lens: interactive word-embedding cluster explorer.
"""

__version__ = "0.1.0"
