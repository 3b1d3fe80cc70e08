"""
Query-string builder for the Strapi REST API.

Strapi expresses filters, relation population, sorting, pagination and field
selection through bracketed parameter names such as
``filters[slug][$eq]=give-back`` or ``populate[0]=category``. StrapiQuery
assembles those pairs in order; httpx takes care of URL encoding.

Filter values arrive from request paths, so they are sanitized before they
reach the query string.
"""
import re
import unicodedata
from typing import List, Tuple, Union
from urllib.parse import quote, urlencode

MAX_FILTER_VALUE_LENGTH = 200

_FIELD_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
# Characters that carry meaning in Strapi's bracket syntax or a query string.
_RESERVED_CHARS = set("[]{}<>&=#?%\\\"'`")

QueryParam = Tuple[str, str]


def sanitize_filter_value(value: Union[str, int]) -> str:
    """
    Make a caller-supplied value safe to use as a filter or path segment.

    Strips surrounding whitespace, drops control characters and characters
    reserved by the query syntax, and caps the length.
    """
    text = str(value).strip()
    cleaned = "".join(
        ch for ch in text
        if ch not in _RESERVED_CHARS and unicodedata.category(ch)[0] != "C"
    )
    return cleaned[:MAX_FILTER_VALUE_LENGTH]


def quote_path_segment(value: Union[str, int]) -> str:
    """Sanitize a value and percent-encode it for use inside a URL path."""
    return quote(sanitize_filter_value(value), safe="")


def _check_field(name: str) -> str:
    if not _FIELD_NAME_RE.match(name):
        raise ValueError(f"Invalid field name: {name!r}")
    return name


class StrapiQuery:
    """Fluent builder for Strapi query parameters."""

    def __init__(self) -> None:
        self._params: List[QueryParam] = []
        self._populate_count = 0
        self._fields_count = 0

    def filter_eq(self, *path: str, value: Union[str, int]) -> "StrapiQuery":
        """Add ``filters[a][b]...[$eq]=value`` for a field path."""
        if not path:
            raise ValueError("filter_eq needs at least one field")
        key = "filters" + "".join(f"[{_check_field(p)}]" for p in path) + "[$eq]"
        self._params.append((key, sanitize_filter_value(value)))
        return self

    def populate(self, *relations: str) -> "StrapiQuery":
        """Add indexed ``populate[n]=relation`` directives."""
        for relation in relations:
            self._params.append(
                (f"populate[{self._populate_count}]", _check_field(relation))
            )
            self._populate_count += 1
        return self

    def populate_all(self) -> "StrapiQuery":
        self._params.append(("populate", "*"))
        return self

    def sort(self, field: str, direction: str = "asc") -> "StrapiQuery":
        direction = direction.lower()
        if direction not in ("asc", "desc"):
            raise ValueError(f"Invalid sort direction: {direction!r}")
        self._params.append(("sort", f"{_check_field(field)}:{direction}"))
        return self

    def limit(self, count: int) -> "StrapiQuery":
        self._params.append(("pagination[limit]", str(int(count))))
        return self

    def page_size(self, count: int) -> "StrapiQuery":
        self._params.append(("pagination[pageSize]", str(int(count))))
        return self

    def fields(self, *names: str) -> "StrapiQuery":
        """Restrict the returned attributes with ``fields[n]=name``."""
        for name in names:
            self._params.append((f"fields[{self._fields_count}]", _check_field(name)))
            self._fields_count += 1
        return self

    def to_params(self) -> List[QueryParam]:
        return list(self._params)

    def to_query_string(self) -> str:
        """Encoded query string, stable for a given sequence of calls."""
        return urlencode(self._params, safe="[]$*:")

    def __bool__(self) -> bool:
        return bool(self._params)

    def __repr__(self) -> str:
        return f"StrapiQuery({self.to_query_string()!r})"
