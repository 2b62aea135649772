"""Core domain: exceptions, cleanup reports, assistant prompt and reply classification."""
