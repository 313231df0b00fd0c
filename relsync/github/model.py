from __future__ import annotations

from dataclasses import dataclass

from relsync.core.structured import StrDict, get_int, get_str


@dataclass(frozen=True, slots=True)
class ReleaseTarget:
    owner: str
    repo: str
    tag: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True, slots=True)
class Release:
    id: int
    tag_name: str

    @classmethod
    def from_payload(cls, data: StrDict) -> Release | None:
        release_id = get_int(data, "id")
        tag_name = get_str(data, "tag_name")
        if release_id is None or tag_name is None:
            return None
        return cls(id=release_id, tag_name=tag_name)


@dataclass(frozen=True, slots=True)
class Asset:
    id: int
    name: str
    size: int | None = None

    @classmethod
    def from_payload(cls, data: StrDict) -> Asset | None:
        asset_id = get_int(data, "id")
        name = get_str(data, "name")
        if asset_id is None or name is None:
            return None
        return cls(id=asset_id, name=name, size=get_int(data, "size"))
