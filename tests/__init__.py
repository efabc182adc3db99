"""Deposit Defender test suite."""
