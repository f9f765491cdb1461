"""
Access-control gate and list scoping.
"""

from dataclasses import dataclass

ME = "me"


def can_access(resource: dict, requester_id: str, owner_field: str = "user_id") -> bool:
    """Public resources are readable by anyone; anything else only by its owner."""
    return resource.get("visibility") == "public" or resource.get(owner_field) == requester_id


@dataclass(frozen=True)
class ListScope:
    """Which owner's items a list endpoint returns, and whether only public ones."""

    owner_id: str | None
    public_only: bool


def list_scope(owner_param: str | None, requester_id: str) -> ListScope:
    """
    Translate an ``author`` / ``owner`` query parameter.

    absent -> everyone's public items; "me" -> all of the requester's items;
    any other id -> that user's public items.
    """
    if not owner_param:
        return ListScope(owner_id=None, public_only=True)
    if owner_param == ME:
        return ListScope(owner_id=requester_id, public_only=False)
    return ListScope(owner_id=owner_param, public_only=True)
