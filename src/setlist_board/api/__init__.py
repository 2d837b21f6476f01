"""HTTP API for the Setlist Board posting core."""
