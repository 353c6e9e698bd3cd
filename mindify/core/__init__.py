"""Configuration, lifecycle events and metrics."""
