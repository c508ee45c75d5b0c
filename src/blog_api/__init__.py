"""Blog API backend: repositories, request-scoped loaders and error mapping."""
