"""Paginated retrieval of organization, repository, collaborator and user data."""
