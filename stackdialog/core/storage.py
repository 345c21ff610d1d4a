"""키-값 Storage 인터페이스 + 인메모리 구현

DialogState는 호출자가 고른 키 1개 아래에 JSON 직렬화 가능한
레코드로 저장된다. 원격 백엔드는 범위 밖 (SqlStorage는 db/storage.py).
"""

import copy
import logging
from abc import ABC, abstractmethod
from typing import Any

logger = logging.getLogger(__name__)

StoreItems = dict[str, Any]


class Storage(ABC):
    """상태 저장소 인터페이스"""

    @abstractmethod
    def read(self, keys: list[str]) -> StoreItems:
        """존재하는 키만 담은 dict 반환"""
        ...

    @abstractmethod
    def write(self, changes: StoreItems) -> None:
        ...

    @abstractmethod
    def delete(self, keys: list[str]) -> None:
        ...


class MemoryStorage(Storage):
    """프로세스 내 dict 기반 저장소.

    읽기/쓰기 모두 deepcopy로 호출자와 분리한다 (영속 저장소와 같은 의미론).
    """

    def __init__(self, initial: StoreItems | None = None) -> None:
        self._memory: StoreItems = copy.deepcopy(initial) if initial else {}

    def read(self, keys: list[str]) -> StoreItems:
        if not keys:
            raise ValueError("Keys are required when reading.")
        return {
            key: copy.deepcopy(self._memory[key])
            for key in keys
            if key in self._memory
        }

    def write(self, changes: StoreItems) -> None:
        if not changes:
            raise ValueError("Changes are required when writing.")
        for key, value in changes.items():
            self._memory[key] = copy.deepcopy(value)
        logger.debug("MemoryStorage write: %s", list(changes))

    def delete(self, keys: list[str]) -> None:
        if not keys:
            raise ValueError("Keys are required when deleting.")
        for key in keys:
            self._memory.pop(key, None)
