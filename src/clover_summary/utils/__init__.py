"""Utility helpers for clover-summary."""
