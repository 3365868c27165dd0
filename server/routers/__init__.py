"""HTTP routers for the Golf letters server."""
