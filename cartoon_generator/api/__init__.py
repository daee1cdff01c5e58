"""HTTP API for the Cartoon Generator."""
