"""hostcrawl.crawler: orchestrator, fetch workers and their collaborators."""
