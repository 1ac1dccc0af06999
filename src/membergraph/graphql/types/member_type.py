"""
Member type GraphQL type definitions
"""

from enum import Enum

import strawberry


@strawberry.enum(description="Fixed membership tiers")
class MemberTypeId(Enum):
    # Member names are the wire values clients send
    basic = "basic"
    business = "business"


@strawberry.type(description="The member type representation in the database")
class MemberType:
    id: MemberTypeId
    discount: float
    posts_limit_per_month: int
