"""
Test helper utilities for wakepower testing.

This module provides reusable builders for running events and power
samples.
"""
