from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional
from ..domain.ports import StoragePort, UseCaseError


@dataclass
class LoadSettings:
    storage: StoragePort

    def __call__(self) -> Optional[Dict]:
        try:
            return self.storage.load_user_settings()
        except Exception as e:
            raise UseCaseError("LOAD_SETTINGS_FAILED", str(e)) from e
