"""
Avalon Role Commitment

Deterministic hidden-role dealing with a Merkle commitment that lets each
player prove their own role without revealing anyone else's.
"""

__version__ = "0.1.0"
