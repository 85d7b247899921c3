"""RFC 8288 ``Link`` header generation for paginated endpoints."""

from __future__ import annotations


def _link(base_url, page, per_page, rel):
    return f'<{base_url}?page={page}&per_page={per_page}>; rel="{rel}"'


def create_link_header(base_url, params, meta):
    """Return a Link header with first, prev, next and last relations as available."""
    links = [_link(base_url, 1, params.per_page, "first")]
    if meta.has_prev:
        links.append(_link(base_url, params.page - 1, params.per_page, "prev"))
    if meta.has_next:
        links.append(_link(base_url, params.page + 1, params.per_page, "next"))
    if meta.total_pages is not None:
        links.append(_link(base_url, meta.total_pages, params.per_page, "last"))
    return ", ".join(links)