"""Test helpers for Monnayeur."""
