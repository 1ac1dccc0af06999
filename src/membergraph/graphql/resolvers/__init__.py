"""Resolver package for the GraphQL schema.

Resolvers read and write exclusively through the repository bundle found in
the GraphQL context. Every relationship resolver issues its own repository
call per parent object.
"""
