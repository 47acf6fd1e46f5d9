"""
merklesum - sum Merkle trees.

A binary hash tree where every node also carries the sum of the leaf
values below it, so one root commits to an ordered leaf set and its total.
"""

__version__ = "0.1.0"
