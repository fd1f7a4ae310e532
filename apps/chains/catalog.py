from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import MalformedCatalog
from .models import NativeCurrency


class CatalogCurrency(BaseModel):
    model_config = ConfigDict(extra='ignore', frozen=True)

    name: str = ''
    symbol: str = ''
    decimals: int = 18

    def to_native(self) -> NativeCurrency:
        return NativeCurrency(name=self.name, symbol=self.symbol, decimals=self.decimals)


class ChainRecord(BaseModel):
    """One chain of the chainid.network catalog. Only chainId and name are required."""

    model_config = ConfigDict(extra='ignore', frozen=True, populate_by_name=True)

    chain_id: int = Field(alias='chainId')
    name: str = Field(min_length=1)
    short_name: str = Field(default='', alias='shortName')
    title: str | None = None
    chain: str = ''
    network: str = ''
    network_id: int | None = Field(default=None, alias='networkId')
    native_currency: CatalogCurrency | None = Field(default=None, alias='nativeCurrency')
    info_url: str = Field(default='', alias='infoURL')
    faucets: tuple[str, ...] = ()
    rpc: tuple[str, ...] = ()


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _resolve_catalog_path(path_value: str) -> Path:
    path = Path(path_value)
    if path.is_absolute():
        return path
    return _repo_root() / path


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = '.'.join(str(item) for item in error.get('loc', ())) or 'record'
        parts.append(f"{location}: {error.get('msg', 'invalid')}")
    return '; '.join(parts)


def load_catalog(records: Iterable[Mapping[str, Any]]) -> list[ChainRecord]:
    loaded: list[ChainRecord] = []
    for index, record in enumerate(records):
        if isinstance(record, ChainRecord):
            loaded.append(record)
            continue
        if not isinstance(record, Mapping):
            raise MalformedCatalog(f'expected an object, got {type(record).__name__}', index=index)
        try:
            loaded.append(ChainRecord.model_validate(dict(record)))
        except ValidationError as exc:
            raise MalformedCatalog(_describe(exc), index=index) from exc
    return loaded


def read_catalog_file(path_value: str) -> list[ChainRecord]:
    path = _resolve_catalog_path(path_value)
    try:
        payload = json.loads(path.read_text(encoding='utf-8'))
    except FileNotFoundError as exc:
        raise MalformedCatalog(f'catalog file not found: {path}') from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise MalformedCatalog(f'catalog file {path} could not be read: {exc}') from exc
    except json.JSONDecodeError as exc:
        raise MalformedCatalog(f'catalog file {path} is not valid JSON: {exc}') from exc

    if not isinstance(payload, list):
        raise MalformedCatalog(f'catalog file {path} must contain a JSON array of chains')
    return load_catalog(payload)
