"""Catalogue of the backend REST resources the console talks to.

Each resource lives on one of three origins (inventory, people, media) and
is addressed as ``<origin>/<path>``. Paths are not consistently cased or
pluralised across services, so some resources list alternate paths that
are tried after the primary one.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from urllib.parse import quote, urlencode

from fetching.normalizer import FieldSpec, RecordNormalizer


@dataclass(frozen=True)
class ResourceSpec:
    name: str
    origin: str
    path: str
    entity: str
    plural: str
    list_aliases: tuple[str, ...] = ()
    alt_paths: tuple[str, ...] = ()
    extra_fields: tuple[FieldSpec, ...] = ()
    display_fields: tuple[str, ...] = ("name",)
    name_only: bool = False

    @cached_property
    def normalizer(self) -> RecordNormalizer:
        return RecordNormalizer(self.entity, (FieldSpec("id", required=True), *self.extra_fields))

    def display_name(self, record: dict) -> str:
        return " ".join(record.get(f, "") for f in self.display_fields if record.get(f)).strip()

    def name_payloads(self, value: str) -> list[dict[str, str]]:
        upper = self.entity[:1].upper() + self.entity[1:]
        return [{"Name": value}, {"name": value}, {f"{self.entity}Name": value}, {f"{upper}Name": value}]


def _fields(*names: str) -> tuple[FieldSpec, ...]:
    return tuple(FieldSpec(n) for n in names)


RESOURCES: dict[str, ResourceSpec] = {
    spec.name: spec
    for spec in (
        ResourceSpec(
            "asset", "media", "assets", "asset", "assets",
            alt_paths=("Assets",),
            extra_fields=_fields("name", "serialNumber", "owner", "status", "categoryName", "supplierName", "createdAt"),
        ),
        ResourceSpec(
            "employee", "people", "Employee", "employee", "employees",
            list_aliases=("employees",),
            extra_fields=_fields("firstName", "lastName", "email", "phoneNumber", "departmentId", "hireDate", "imageUrl"),
            display_fields=("firstName", "lastName"),
        ),
        ResourceSpec(
            "department", "people", "Department", "department", "departments",
            list_aliases=("departments",),
            name_only=True,
        ),
        ResourceSpec(
            "location", "inventory", "location", "location", "locations",
            list_aliases=("locations", "locationList"),
            alt_paths=("Location", "locations"),
            name_only=True,
        ),
        ResourceSpec(
            "invoice", "inventory", "Invoice", "invoice", "invoices",
            alt_paths=("Invoices",),
            extra_fields=_fields("number", "date", "totalAmount", "description"),
            display_fields=("number",),
        ),
        ResourceSpec(
            "owner", "inventory", "Owner", "owner", "owners",
            extra_fields=_fields("name", "email", "ownerTypeId"),
        ),
        ResourceSpec(
            "owner-type", "inventory", "OwnerType", "ownerType", "owner types",
            alt_paths=("OwnerTypes",),
            name_only=True,
        ),
        ResourceSpec(
            "supplier", "inventory", "Suppliers", "supplier", "suppliers",
            alt_paths=("Supplier",),
            extra_fields=_fields("name", "email", "phone", "address"),
        ),
        ResourceSpec(
            "maintainer", "inventory", "Maintainer", "maintainer", "maintainers",
            extra_fields=_fields("name", "email", "phone"),
        ),
        ResourceSpec(
            "temporary-user", "inventory", "TemporaryUser", "temporaryUser", "temporary users",
            list_aliases=("temporaryUsers", "temporaryUserList"),
            extra_fields=(FieldSpec("name"), FieldSpec("description", aliases=("description", "Description", "desc"))),
        ),
        ResourceSpec(
            "user", "media", "users", "user", "users",
            extra_fields=_fields("name", "email", "role", "imageUrl", "createdAt"),
        ),
        ResourceSpec(
            "category", "inventory", "Categories", "category", "categories",
            alt_paths=("categories",),
            name_only=True,
        ),
    )
}


def get_resource(name: str) -> ResourceSpec:
    key = name.strip().replace("_", "-").lower()
    if key not in RESOURCES:
        # CamelCase spellings such as OwnerType
        key = "".join("-" + c.lower() if c.isupper() else c for c in name.strip()).lstrip("-")
    spec = RESOURCES.get(key)
    if spec is None:
        raise ValueError(f"Unknown resource: {name}")
    return spec


def candidate_urls(spec: ResourceSpec, base: str, page: int, page_size: int) -> list[str]:
    root = f"{base.rstrip('/')}/{spec.path}"
    offset = (page - 1) * page_size
    patterns = [
        {"page": page, "limit": page_size},
        {"page": page, "pageSize": page_size},
        {"pageNumber": page, "pageSize": page_size},
        {"page": page},
        {"skip": offset, "take": page_size},
        {"offset": offset, "limit": page_size},
    ]
    urls = [f"{root}?{urlencode(p)}" for p in patterns]
    urls.append(root)
    for alt in spec.alt_paths:
        urls.append(f"{base.rstrip('/')}/{alt}?{urlencode({'page': page, 'limit': page_size})}")
    return urls


def search_candidate_urls(spec: ResourceSpec, base: str, term: str) -> list[str]:
    root = f"{base.rstrip('/')}/{spec.path}"
    q = quote(term, safe="")
    return [f"{root}?search={q}", f"{root}?name={q}", f"{root}?q={q}", root]


__all__ = ["RESOURCES", "ResourceSpec", "candidate_urls", "get_resource", "search_candidate_urls"]
