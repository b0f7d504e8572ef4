"""Services: release orchestration and validator launching."""
