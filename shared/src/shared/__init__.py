"""
Shared utilities for Monnayeur components.
"""
