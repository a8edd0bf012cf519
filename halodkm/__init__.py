"""HaloDKM community management backend."""
