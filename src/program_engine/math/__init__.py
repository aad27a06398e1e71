"""Pure policy and progression functions."""
