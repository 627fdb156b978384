"""Utility helpers for wakepower."""
