"""
MockAPI — Collection Lookups
=============================

What:  Small derived queries over plain collections: posts owned by a user,
       and json-server style field-equality filtering for the generic
       collection routes.
How:   Pure functions; original order is preserved and inputs are not modified.
"""

from typing import Any, Iterable, List, Mapping

Record = Mapping[str, Any]


def posts_for_user(posts: Iterable[Record], user_id: Any) -> List[Record]:
    """
    Return the posts whose `userId` matches `user_id`.

    Ids are compared as strings: the path parameter is always a string,
    while the seed data stores integers.
    """
    wanted = str(user_id)
    return [post for post in posts if str(post.get("userId")) == wanted]


def filter_by_fields(records: Iterable[Record], filters: Mapping[str, str]) -> List[Record]:
    """
    Keep records whose fields equal every given query value.

    Example:
        GET /api/movies?genre=Drama  →  filter_by_fields(movies, {"genre": "Drama"})

    Booleans are matched against "true"/"false"; records lacking a field
    never match a filter on it.
    """
    def _matches(record: Record) -> bool:
        for field, expected in filters.items():
            if field not in record:
                return False
            value = record[field]
            if isinstance(value, bool):
                value = "true" if value else "false"
            if str(value) != expected:
                return False
        return True

    return [record for record in records if _matches(record)]
