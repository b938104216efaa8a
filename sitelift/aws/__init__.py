"""AWS components for sitelift."""
