"""Small, self-contained helpers that do not depend on project internals."""
