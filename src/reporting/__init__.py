"""Text report rendering."""
