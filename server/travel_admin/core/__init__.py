"""Configuration, persistence, security and HTTP plumbing."""
