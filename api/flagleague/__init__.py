"""Flag football league management API."""
