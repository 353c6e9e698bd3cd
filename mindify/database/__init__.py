"""MongoDB access: connection manager, repositories and seeding."""
