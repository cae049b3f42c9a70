"""Host information analyzers."""
