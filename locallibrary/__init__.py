"""Local Library Catalog: server-rendered catalog of authors, books, genres and copies.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
