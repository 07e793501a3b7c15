"""
部分更新语句构造
把一组可选字段映射为单条 UPDATE；字段集为空时不生成语句
"""
from enum import Enum
from typing import Any, Mapping, Optional
from sqlalchemy import update
from sqlalchemy.orm import Session
from sqlalchemy.sql.dml import Update


def build_update(model, entity_id: int, fields: Mapping[str, Any]) -> Optional[Update]:
    """构造 UPDATE model SET ... WHERE id = entity_id；None 值视为未提供"""
    columns = set(model.__table__.columns.keys())
    values = {}
    for key, value in fields.items():
        if value is None:
            continue
        if key not in columns or key == "id":
            raise ValueError(f"{key}: not an updatable field")
        values[key] = value.value if isinstance(value, Enum) else value

    if not values:
        return None
    return update(model).where(model.id == entity_id).values(**values)


def apply_update(db: Session, model, entity_id: int, fields: Mapping[str, Any]) -> Optional[int]:
    """执行部分更新，返回受影响行数；无字段可更新时返回 None"""
    stmt = build_update(model, entity_id, fields)
    if stmt is None:
        return None
    result = db.execute(stmt)
    db.commit()
    return result.rowcount
