"""
Two-level comment hierarchy: reply validation and tree assembly.
"""

from collections import defaultdict

from boibritto.errors import NotFoundError, ValidationError
from boibritto.providers import SQLiteStorage


def validate_reply_parent(storage: SQLiteStorage, discussion_id: str, parent_id: str) -> dict:
    """
    Check that ``parent_id`` can receive a reply in ``discussion_id``.

    The parent must exist, belong to the same discussion and be a top-level
    comment itself. Returns the parent comment.
    """
    parent = storage.get_comment(parent_id)
    if not parent:
        raise NotFoundError("Parent comment not found")
    if parent["discussion_id"] != discussion_id:
        raise ValidationError("Parent comment must belong to the same discussion")
    if parent.get("parent_comment"):
        raise ValidationError("Comments can only be 1 level deep (replies to replies are not allowed)")
    return parent


def _sort_key(comment: dict) -> tuple[str, str]:
    return comment["created_at"], comment["id"]


def build_comment_tree(comments: list[dict]) -> list[dict]:
    """
    Nest replies under their parents.

    Replies are grouped by parent id in one pass. Both levels are ordered
    oldest first. Replies whose parent is missing are dropped.
    """
    replies_by_parent: dict[str, list[dict]] = defaultdict(list)
    top_level = []
    for comment in comments:
        parent_id = comment.get("parent_comment")
        if parent_id:
            replies_by_parent[parent_id].append(comment)
        else:
            top_level.append(comment)

    tree = []
    for comment in sorted(top_level, key=_sort_key):
        tree.append({**comment, "replies": sorted(replies_by_parent.get(comment["id"], []), key=_sort_key)})
    return tree
