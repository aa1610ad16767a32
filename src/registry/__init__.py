"""Package index clients."""
