"""Page rendering and the build orchestrator."""
