from __future__ import annotations
from move_core.types.language_storage import ModuleId
from move_core.types.move_types import MoveModule
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Mapping, Optional, Tuple
import bisect

# Both containers hand out their smallest `ModuleId` first. Modules are therefore fetched and
# walked in a reproducible order no matter in which order they were discovered.


# Module ids still awaiting retrieval.
@dataclass
class ModuleFrontier:
    ids: List[ModuleId] = field(default_factory=list)

    def add(self, module_id: ModuleId) -> bool:
        idx = bisect.bisect_left(self.ids, module_id)
        if idx < len(self.ids) and self.ids[idx] == module_id:
            return False
        self.ids.insert(idx, module_id)
        return True

    def extend(self, module_ids: Iterable[ModuleId]) -> None:
        for module_id in module_ids:
            self.add(module_id)

    def pop_first(self) -> Optional[ModuleId]:
        if not self.ids:
            return None
        return self.ids.pop(0)

    def __contains__(self, module_id: ModuleId) -> bool:
        idx = bisect.bisect_left(self.ids, module_id)
        return idx < len(self.ids) and self.ids[idx] == module_id

    def __iter__(self) -> Iterator[ModuleId]:
        return iter(self.ids)

    def __len__(self) -> int:
        return len(self.ids)


# Modules obtained (fetched or supplied by the caller) but not yet walked.
@dataclass
class PendingModules:
    modules: Mapping[ModuleId, MoveModule] = field(default_factory=dict)

    def insert(self, module_id: ModuleId, module: MoveModule) -> None:
        self.modules[module_id] = module

    def pop_first(self) -> Optional[Tuple[ModuleId, MoveModule]]:
        if not self.modules:
            return None
        module_id = min(self.modules)
        return (module_id, self.modules.pop(module_id))

    def __contains__(self, module_id: ModuleId) -> bool:
        return module_id in self.modules

    def __len__(self) -> int:
        return len(self.modules)
