"""Application layer: workflow and service orchestrators."""
