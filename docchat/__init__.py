"""Document chat backend: provider-backed document Q&A sessions."""
