from __future__ import annotations
from move_core.types.language_storage import ModuleId
from dataclasses import dataclass


class TypeAccessorError(Exception):
    pass


class EmptyInput(TypeAccessorError):
    def __str__(self):
        return "Cannot build TypeAccessor without any modules to lookup or add"


class MissingSource(TypeAccessorError):
    def __str__(self):
        return "Cannot build TypeAccessor without a module source if we need to lookup modules"


class BuilderConsumed(TypeAccessorError):
    def __str__(self):
        return "TypeAccessorBuilder has already been built"


class Cancelled(TypeAccessorError):
    def __str__(self):
        return "TypeAccessor build was cancelled"


# Raised by module sources when the module does not exist at the given address.
@dataclass(eq=False)
class ModuleNotFound(TypeAccessorError):
    module_id: ModuleId

    def __str__(self):
        return f"Module {self.module_id} not found"


@dataclass(eq=False)
class ModuleFetchFailed(TypeAccessorError):
    module_id: ModuleId
    cause: Exception

    def __str__(self):
        return f"Failed to get module {self.module_id}: {self.cause}"


@dataclass(eq=False)
class ModuleDecodeFailed(TypeAccessorError):
    module_id: ModuleId
    cause: Exception

    def __str__(self):
        return f"Failed to deserialize module {self.module_id}: {self.cause}"
