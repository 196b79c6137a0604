"""Hospital management backend: staff accounts and authentication."""
