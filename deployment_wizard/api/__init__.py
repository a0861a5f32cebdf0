"""HTTP API for the deployment wizard."""
