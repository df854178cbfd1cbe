from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import httpx

from snowbored.infra.exceptions import AssetLoadError
from snowbored.infra.settings import Settings


logger = logging.getLogger("snowbored.assets")


@dataclass(frozen=True)
class AssetResult:
    """
    Outcome of one candidate chain. `data` is None when every candidate
    failed; `errors` keeps one message per failed candidate, in order.
    """
    name: str
    data: bytes | None
    source: str | None
    errors: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.data is not None


@dataclass(frozen=True)
class SpriteBytes:
    player: AssetResult
    heart: AssetResult
    background: AssetResult
    trees: tuple[AssetResult, ...] = field(default_factory=tuple)
    snowmen: tuple[AssetResult, ...] = field(default_factory=tuple)

    def all(self) -> tuple[AssetResult, ...]:
        return (self.player, self.heart, self.background, *self.trees, *self.snowmen)

    @property
    def failed(self) -> tuple[AssetResult, ...]:
        return tuple(r for r in self.all() if not r.ok)


def _is_url(candidate: str) -> bool:
    return candidate.startswith(("http://", "https://"))


class AssetFetcher:
    def __init__(self, *, base_dir: Path, client: httpx.Client) -> None:
        self._base_dir = base_dir
        self._client = client

    def fetch(self, candidate: str) -> bytes:
        if _is_url(candidate):
            return self._fetch_url(candidate)
        return self._read_file(candidate)

    def _fetch_url(self, url: str) -> bytes:
        try:
            resp = self._client.get(url)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise AssetLoadError(f"{url}: {e}") from e
        if not resp.content:
            raise AssetLoadError(f"{url}: empty response")
        return resp.content

    def _read_file(self, candidate: str) -> bytes:
        path = Path(candidate).expanduser()
        if not path.is_absolute():
            path = self._base_dir / path
        try:
            data = path.read_bytes()
        except OSError as e:
            raise AssetLoadError(f"{path}: {e}") from e
        if not data:
            raise AssetLoadError(f"{path}: empty file")
        return data


def resolve_asset(fetcher: AssetFetcher, name: str, candidates: list[str]) -> AssetResult:
    errors: list[str] = []
    for candidate in candidates:
        try:
            data = fetcher.fetch(candidate)
        except AssetLoadError as e:
            errors.append(str(e))
            logger.warning("Asset %s: candidate failed (%s)", name, e)
            continue
        if errors:
            logger.info("Asset %s: using fallback %s", name, candidate)
        return AssetResult(name=name, data=data, source=candidate, errors=tuple(errors))

    if not candidates:
        errors.append("no candidates configured")
    logger.warning("Asset %s unavailable, rendering without it", name)
    return AssetResult(name=name, data=None, source=None, errors=tuple(errors))


def fetch_sprite_bytes(settings: Settings, *, client: httpx.Client | None = None) -> SpriteBytes:
    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=settings.asset_timeout, follow_redirects=True)
    try:
        fetcher = AssetFetcher(base_dir=settings.base_dir, client=client)
        a = settings.assets
        return SpriteBytes(
            player=resolve_asset(fetcher, "player", a["player"]),
            heart=resolve_asset(fetcher, "heart", a["heart"]),
            background=resolve_asset(fetcher, "background", a["background"]),
            trees=tuple(
                resolve_asset(fetcher, f"tree{i + 1}", chain) for i, chain in enumerate(a["trees"])
            ),
            snowmen=tuple(
                resolve_asset(fetcher, f"snowman{i + 1}", chain) for i, chain in enumerate(a["snowmen"])
            ),
        )
    finally:
        if owns_client:
            client.close()
