"""HTTP API for RuleCraft."""
