"""DevConnector: social profile API for developers."""

__version__ = "0.1.0"


def main() -> None:
    """Entry point for the API server."""
    from devconnector.api.main import main as api_main

    api_main()
