"""Version-chain engine.

This module records a JSON document as a chain of forward deltas and
navigates, reconstructs, and re-applies past states from that chain.
"""
