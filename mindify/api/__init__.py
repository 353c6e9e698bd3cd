"""HTTP application, dependencies and middleware."""
