"""User-facing interfaces for Nexus."""
