from type_accessor.version import version
from type_accessor.accessor import TypeAccessor
from type_accessor.builder import TypeAccessorBuilder, BuildConfig, build_type_accessor
from type_accessor.decoder import ModuleDecoder, CanonicalModuleDecoder, AbiJsonDecoder
from type_accessor.module_source import ModuleSource, InMemoryModuleSource, RestModuleSource, RestSourceConfig
from type_accessor.errors import (
    TypeAccessorError, EmptyInput, MissingSource, ModuleFetchFailed, ModuleDecodeFailed, ModuleNotFound,
    Cancelled, BuilderConsumed,
)
