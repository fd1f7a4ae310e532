from __future__ import annotations


class ChainRegistryError(Exception):
    """Fatal configuration error; no registry is published when raised."""


class MalformedCatalog(ChainRegistryError):
    def __init__(self, detail: str, index: int | None = None) -> None:
        if index is not None:
            detail = f'catalog record #{index}: {detail}'
        super().__init__(detail)
        self.index = index
        self.detail = detail


class DuplicateChainId(ChainRegistryError):
    def __init__(self, chain_id: int) -> None:
        super().__init__(
            f'Corrupt chains catalog: multiple chains have the same chainId: {chain_id}'
        )
        self.chain_id = chain_id


class ChainValidationError(Exception):
    """Recoverable per-request failure, surfaced to callers with an HTTP status."""

    status_code = 400

    def __init__(self, chain_id: int | str, detail: str) -> None:
        super().__init__(detail)
        self.chain_id = chain_id
        self.detail = detail


class ChainNotSupported(ChainValidationError):
    status_code = 400

    def __init__(self, chain_id: int | str) -> None:
        super().__init__(chain_id, f'Chain {chain_id} not supported for verification!')


class UnknownChain(ChainValidationError):
    status_code = 404

    def __init__(self, chain_id: int | str) -> None:
        super().__init__(chain_id, f'Chain {chain_id} is not a registered chain!')
