"""Interactive client for the seqthink API."""
