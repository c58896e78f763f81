"""HTTP API for DevConnector."""
