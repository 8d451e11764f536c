"""Backend resource registry/client factory."""
from __future__ import annotations

from .client import ResourceClient, ResourcePage
from .registry import RESOURCES, ResourceSpec, candidate_urls, get_resource, search_candidate_urls
from .upload import upload_image


def get_client(name: str, **kwargs) -> ResourceClient:
    return ResourceClient(get_resource(name), **kwargs)


__all__ = [
    "RESOURCES",
    "ResourceClient",
    "ResourcePage",
    "ResourceSpec",
    "candidate_urls",
    "get_client",
    "get_resource",
    "search_candidate_urls",
    "upload_image",
]
