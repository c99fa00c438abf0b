"""Service layer: operations over the stored user collection."""
