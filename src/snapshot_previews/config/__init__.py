"""Configuration constants for snapshot preview testing."""
