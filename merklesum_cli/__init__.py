"""
merklesum CLI

Command-line interface for building sum Merkle trees and audit proofs.

Usage:
    python -m merklesum_cli root --sequence 100
    python -m merklesum_cli root 5:0x<64 hex> 7:0x<64 hex>
    python -m merklesum_cli prove 0 --sequence 100
    python -m merklesum_cli config --show
"""

__version__ = "0.1.0"
