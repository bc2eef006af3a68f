"""Persistence store layer.

This module provides JSON blob stores addressed by path: local disk,
in-memory, and S3 backends in blocking and awaitable flavours.
"""
