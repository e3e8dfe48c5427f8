"""
Merkle CLI

Command-line demonstration of the padded Merkle tree library.

Usage:
    python -m merkle_cli demo
    python -m merkle_cli root 1 2 3
    python -m merkle_cli prove 2 --range 5 --out proof.json
    python -m merkle_cli verify proof.json --value 2
    python -m merkle_cli config --init
"""

__version__ = "0.1.0"
