"""LVM and host analyzers."""
