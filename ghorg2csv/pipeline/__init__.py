"""End-to-end org report run: CLI settings, stage orchestration and exit codes."""
