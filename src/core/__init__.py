"""Report orchestration and command line entry point."""
