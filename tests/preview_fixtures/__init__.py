"""Sample preview declarations scanned by the discovery, CLI and plugin tests."""
