from __future__ import annotations
from move_core.types.language_storage import ModuleId
from move_core.types.move_types import MoveModule
from type_accessor.accessor import TypeAccessor
from type_accessor.decoder import ModuleDecoder
from type_accessor.errors import (
    BuilderConsumed, Cancelled, EmptyInput, MissingSource, ModuleDecodeFailed, ModuleFetchFailed,
)
from type_accessor.frontier import ModuleFrontier, PendingModules
from type_accessor.module_source import ModuleSource
from type_accessor.walker import walk_module
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Union
import asyncio
import logging

logger = logging.getLogger(__name__)

ModuleIdLike = Union[ModuleId, str]


def into_module_id(module_id: ModuleIdLike) -> ModuleId:
    if isinstance(module_id, ModuleId):
        return module_id
    return ModuleId.from_str(module_id)


class TypeAccessorBuilder:
    """
    Collects the modules a `TypeAccessor` should cover, then resolves them in `build`.

    Modules to look up go into the frontier; modules we already have go straight into the
    pending set. `build` then alternates between fetching everything in the frontier and
    walking everything pending, where walking may put newly referenced modules back into the
    frontier. Each module is fetched at most once, and modules that were added directly are
    never fetched.

    A builder is consumed by `build`; it cannot be reconfigured or built again afterwards.
    """

    def __init__(self):
        self.modules_to_retrieve = ModuleFrontier()
        self.modules = PendingModules()
        self.recurse = True
        self.follow_type_args = False
        self.max_concurrent_fetches = 1
        self.source: Optional[ModuleSource] = None
        self.module_decoder: Optional[ModuleDecoder] = None
        self.cancel_event: Optional[asyncio.Event] = None
        self._consumed = False

    def _ensure_not_consumed(self) -> None:
        if self._consumed:
            raise BuilderConsumed()

    # Add the source that we'll use for the lookups. This must be provided if we're going to
    # do lookups.
    def module_source(self, source: ModuleSource) -> TypeAccessorBuilder:
        self._ensure_not_consumed()
        self.source = source
        return self

    # Decoder for the bytes returned by the source, defaults to `source.default_decoder()`.
    def decoder(self, decoder: ModuleDecoder) -> TypeAccessorBuilder:
        self._ensure_not_consumed()
        self.module_decoder = decoder
        return self

    # Add modules that will be looked up when building the TypeAccessor.
    def lookup_modules(self, module_ids: Iterable[ModuleIdLike]) -> TypeAccessorBuilder:
        self._ensure_not_consumed()
        self.modules_to_retrieve.extend(into_module_id(x) for x in module_ids)
        return self

    def lookup_module(self, module_id: ModuleIdLike) -> TypeAccessorBuilder:
        return self.lookup_modules([module_id])

    # Add modules that we already have.
    def add_modules(self, modules: Iterable[MoveModule]) -> TypeAccessorBuilder:
        self._ensure_not_consumed()
        for module in modules:
            self.modules.insert(module.module_id(), module)
        return self

    def add_module(self, module: MoveModule) -> TypeAccessorBuilder:
        return self.add_modules([module])

    # If set, do not look up modules as needed if they appear while building the
    # TypeAccessor.
    def do_not_recurse(self) -> TypeAccessorBuilder:
        self._ensure_not_consumed()
        self.recurse = False
        return self

    # Also resolve the modules named by type arguments, e.g. `0x5::usdc` in
    # `0x1::coin::Coin<0x5::usdc::USDC>`.
    def follow_type_arguments(self) -> TypeAccessorBuilder:
        self._ensure_not_consumed()
        self.follow_type_args = True
        return self

    def concurrent_fetches(self, n: int) -> TypeAccessorBuilder:
        self._ensure_not_consumed()
        if n < 1:
            raise ValueError(f"concurrent_fetches must be at least 1, got {n}")
        self.max_concurrent_fetches = n
        return self

    # Abort the build with `Cancelled` once `event` is set. Checked before each fetch.
    def cancel_on(self, event: asyncio.Event) -> TypeAccessorBuilder:
        self._ensure_not_consumed()
        self.cancel_event = event
        return self

    async def build(self) -> TypeAccessor:
        self._ensure_not_consumed()
        self._consumed = True

        if not self.modules_to_retrieve and not self.modules:
            raise EmptyInput()
        if self.modules_to_retrieve and self.source is None:
            raise MissingSource()

        decoder = self.module_decoder
        if decoder is None and self.source is not None:
            decoder = self.source.default_decoder()

        try:
            field_info = await self.resolve(decoder)
        finally:
            # The builder is consumed, drop its working state.
            self.modules_to_retrieve = ModuleFrontier()
            self.modules = PendingModules()

        accessor = TypeAccessor(field_info)
        logger.info("Built TypeAccessor covering %d modules", len(accessor))
        return accessor

    async def resolve(self, decoder: Optional[ModuleDecoder]):
        field_info = {}

        while True:
            if self.modules_to_retrieve:
                # If there are modules to lookup, do that.
                if self.source is None:
                    raise MissingSource()
                batch = []
                while self.modules_to_retrieve:
                    module_id = self.modules_to_retrieve.pop_first()
                    if module_id in self.modules or module_id in field_info:
                        continue
                    batch.append(module_id)
                    if len(batch) >= self.max_concurrent_fetches:
                        await self.retrieve_batch(batch, decoder)
                        batch = []
                if batch:
                    await self.retrieve_batch(batch, decoder)
            elif self.modules:
                # We have no modules to retrieve right now, let's walk the modules we have.
                while self.modules:
                    (module_id, module) = self.modules.pop_first()
                    logger.debug("Walking module %s", module_id)
                    (structs_info, modules_to_retrieve) = walk_module(module, self.follow_type_args)
                    field_info[module_id] = structs_info

                    if self.recurse:
                        for discovered in sorted(modules_to_retrieve):
                            if discovered in self.modules or discovered in field_info:
                                continue
                            self.modules_to_retrieve.add(discovered)
            else:
                # We have no modules to retrieve and no modules to walk, we're done.
                break

        return field_info

    def build_sync(self) -> TypeAccessor:
        return asyncio.run(self.build())

    def check_cancelled(self) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            logger.error("TypeAccessor build cancelled")
            raise Cancelled()

    async def retrieve_batch(self, module_ids: List[ModuleId], decoder: ModuleDecoder) -> None:
        if len(module_ids) == 1:
            self.check_cancelled()
            module = await self.retrieve_module(module_ids[0], decoder)
            self.modules.insert(module_ids[0], module)
            return

        async def retrieve(module_id: ModuleId) -> Tuple[ModuleId, MoveModule]:
            self.check_cancelled()
            return (module_id, await self.retrieve_module(module_id, decoder))

        results = await asyncio.gather(
            *[retrieve(module_id) for module_id in module_ids],
            return_exceptions=True,
        )
        # Results come back in request order, which is ascending module id order. Report the
        # first failure in that order so the outcome does not depend on scheduling.
        for result in results:
            if isinstance(result, BaseException):
                raise result
        for (module_id, module) in results:
            self.modules.insert(module_id, module)

    async def retrieve_module(self, module_id: ModuleId, decoder: ModuleDecoder) -> MoveModule:
        logger.debug("Fetching module %s", module_id)
        try:
            module_bytecode = await self.source.fetch(module_id)
        except Exception as err:
            logger.error("Failed to get module %s: %s", module_id, err)
            raise ModuleFetchFailed(module_id, err) from err

        try:
            return decoder.decode(module_bytecode)
        except Exception as err:
            logger.error("Failed to deserialize module %s: %s", module_id, err)
            raise ModuleDecodeFailed(module_id, err) from err


@dataclass
class BuildConfig:
    seed_lookups: List[ModuleIdLike] = field(default_factory=list)
    seed_modules: List[MoveModule] = field(default_factory=list)
    source: Optional[ModuleSource] = None
    recurse: bool = True
    decoder: Optional[ModuleDecoder] = None
    follow_type_arguments: bool = False
    concurrency: int = 1
    cancel_event: Optional[asyncio.Event] = None

    def into_builder(self) -> TypeAccessorBuilder:
        builder = TypeAccessorBuilder()\
            .lookup_modules(self.seed_lookups)\
            .add_modules(self.seed_modules)\
            .concurrent_fetches(self.concurrency)
        if self.source is not None:
            builder.module_source(self.source)
        if self.decoder is not None:
            builder.decoder(self.decoder)
        if not self.recurse:
            builder.do_not_recurse()
        if self.follow_type_arguments:
            builder.follow_type_arguments()
        if self.cancel_event is not None:
            builder.cancel_on(self.cancel_event)
        return builder


async def build_type_accessor(config: BuildConfig) -> TypeAccessor:
    return await config.into_builder().build()
