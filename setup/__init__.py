"""Configuration models, loading and CLI output for the provisioner."""
