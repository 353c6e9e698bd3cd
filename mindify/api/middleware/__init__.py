"""Request middleware for the Mindify API."""
