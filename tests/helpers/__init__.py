"""Test helpers for FutureGraph."""
