"""HTTP API served next to the dashboard."""
