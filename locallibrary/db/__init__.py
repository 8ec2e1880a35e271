"""Database Base: the declarative Base every catalog model inherits from."""
