"""Utility helpers for calrecur."""
