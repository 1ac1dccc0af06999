"""
Post GraphQL type definitions
"""

import strawberry

from ..scalars import UUID


@strawberry.type(description="The post representation in the database")
class Post:
    id: UUID
    title: str
    content: str
    author_id: UUID
