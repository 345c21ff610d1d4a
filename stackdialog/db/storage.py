"""SqlStorage - Storage 인터페이스의 SQLAlchemy 구현

Service → DB 레이어. 세션 수명은 호출자(서비스/lifespan)가 관리한다.
"""

import copy
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from stackdialog.core.logging import get_logger
from stackdialog.core.storage import Storage, StoreItems
from stackdialog.db.models import StateRecordModel

logger = get_logger(__name__)


class SqlStorage(Storage):
    """state_records 테이블 기반 저장소"""

    def __init__(self, db_session: Session) -> None:
        self._db = db_session

    def read(self, keys: list[str]) -> StoreItems:
        if not keys:
            raise ValueError("Keys are required when reading.")
        rows = (
            self._db.query(StateRecordModel)
            .filter(StateRecordModel.key.in_(keys))
            .all()
        )
        # ORM이 들고 있는 dict와 분리
        return {row.key: copy.deepcopy(row.data) for row in rows}

    def write(self, changes: StoreItems) -> None:
        if not changes:
            raise ValueError("Changes are required when writing.")
        now = datetime.now(timezone.utc)
        for key, value in changes.items():
            row = self._db.get(StateRecordModel, key)
            if row is None:
                row = StateRecordModel(key=key, data=value, etag=1, updated_at=now)
                self._db.add(row)
            else:
                # JSON 컬럼은 재할당해야 변경이 감지된다
                row.data = value
                row.etag = row.etag + 1
                row.updated_at = now
        self._db.commit()
        logger.debug("SqlStorage write: %s", list(changes))

    def delete(self, keys: list[str]) -> None:
        if not keys:
            raise ValueError("Keys are required when deleting.")
        (
            self._db.query(StateRecordModel)
            .filter(StateRecordModel.key.in_(keys))
            .delete(synchronize_session=False)
        )
        self._db.commit()
