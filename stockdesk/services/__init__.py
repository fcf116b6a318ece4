"""Service integrations."""
