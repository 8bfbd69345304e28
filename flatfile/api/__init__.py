"""Interchange surface of the codec."""
