from __future__ import annotations
from move_core.types.account_address import AccountAddress
from move_core.types.language_storage import ModuleId
from move_core.types.move_types import MoveModule
from type_accessor.decoder import ModuleDecoder, CanonicalModuleDecoder, AbiJsonDecoder
from type_accessor.errors import ModuleNotFound
from dataclasses import dataclass, field
from dataclasses_json import dataclass_json
from typing import Dict, List, Mapping, Optional
import abc
import httpx
import logging

logger = logging.getLogger(__name__)


# `ModuleSource` supplies the raw bytes of on-chain modules. Fetching may suspend (network,
# storage), hence the coroutine. Implementations raise `ModuleNotFound` for modules that do
# not exist; any other exception is treated as a transport failure by the builder.
class ModuleSource(abc.ABC):

    @abc.abstractmethod
    async def fetch(self, module_id: ModuleId) -> bytes:
        pass

    # The decoder that understands what `fetch` returns.
    def default_decoder(self) -> ModuleDecoder:
        return CanonicalModuleDecoder()


# An in-memory implementation of `ModuleSource`.
#
# Tests use this to set up modules, and can inspect `fetch_log` to see which modules were
# requested and in which order.
@dataclass
class InMemoryModuleSource(ModuleSource):
    data: Dict[ModuleId, bytes] = field(default_factory=dict)
    fetch_log: List[ModuleId] = field(default_factory=list)

    # Adds a `MoveModule` to this source in its canonical serialization.
    def add_module(self, module: MoveModule) -> InMemoryModuleSource:
        self.set(module.module_id(), module.serialize())
        return self

    # Sets the raw bytes for a module id, returns the previous bytes if the key was occupied.
    def set(self, module_id: ModuleId, blob: bytes) -> Optional[bytes]:
        ret = self.data.get(module_id)
        self.data[module_id] = blob
        return ret

    def remove(self, module_id: ModuleId) -> Optional[bytes]:
        return self.data.pop(module_id, None)

    def fetch_count(self, module_id: ModuleId) -> int:
        return self.fetch_log.count(module_id)

    async def fetch(self, module_id: ModuleId) -> bytes:
        self.fetch_log.append(module_id)
        if module_id not in self.data:
            raise ModuleNotFound(module_id)
        return self.data[module_id]


@dataclass_json
@dataclass
class RestSourceConfig:
    base_url: str
    timeout: float = 10.0
    ledger_version: Optional[int] = None
    headers: Dict[str, str] = field(default_factory=dict)


# A `ModuleSource` backed by the REST API of a full node: modules are read from
# `{base_url}/accounts/{address}/module/{name}` as JSON and decoded from their ABI.
class RestModuleSource(ModuleSource):

    def __init__(self, config: RestSourceConfig, client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(
                base_url=config.base_url,
                timeout=config.timeout,
                headers=config.headers,
            )
        self.client = client

    @classmethod
    def from_url(cls, base_url: str, **kwargs) -> RestModuleSource:
        return cls(RestSourceConfig(base_url, **kwargs))

    def default_decoder(self) -> ModuleDecoder:
        return AbiJsonDecoder()

    def module_path(self, module_id: ModuleId) -> str:
        address = AccountAddress.to_hex_literal(module_id.address)
        return f"{self.config.base_url.rstrip('/')}/accounts/{address}/module/{module_id.name}"

    async def fetch(self, module_id: ModuleId) -> bytes:
        params: Mapping[str, str] = {}
        if self.config.ledger_version is not None:
            params = {"ledger_version": str(self.config.ledger_version)}
        url = self.module_path(module_id)
        logger.debug("GET %s", url)
        response = await self.client.get(url, params=params, headers={"Accept": "application/json"})
        if response.status_code == 404:
            raise ModuleNotFound(module_id)
        response.raise_for_status()
        return response.content

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> RestModuleSource:
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()
