"""Infrastructure layer - configuration, persistence, security and logging."""
