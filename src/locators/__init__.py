"""Versioned locator overlay resolution."""
