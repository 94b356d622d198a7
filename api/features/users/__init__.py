"""Users feature package: attendants and clients share one table split by role."""
