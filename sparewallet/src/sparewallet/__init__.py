"""
sparewallet - Wallet daemon access for spare-send
"""

__version__ = "0.3.0"
