"""HTTP application: app factory, dependencies and middleware."""
