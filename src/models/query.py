from __future__ import annotations
import logging
from enum import Enum
from typing import Optional

from boto3.dynamodb.conditions import Attr, ConditionBase
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger("uvicorn")

# フィルタ付きスキャンで取得する属性
PROJECTION = ("index", "name", "users", "active")


class ItemStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


def parse_status(raw: Optional[str]) -> Optional[ItemStatus]:
    """
    status パラメータを解釈します。

    "active" / "inactive" 以外の値 ("all" や "both" など) はエラーにせず、
    フィルタなしとして扱います。
    """
    if raw == ItemStatus.ACTIVE.value:
        return ItemStatus.ACTIVE
    if raw == ItemStatus.INACTIVE.value:
        return ItemStatus.INACTIVE
    if raw:
        logger.debug(f"Ignoring unsupported status filter: {raw}")
    return None


class ItemQuery(BaseModel):
    """
    /list リクエスト1件分の検索条件。
    リクエストごとに生成され、共有されることはありません。
    """

    model_config = ConfigDict(frozen=True)

    table_name: str
    name: Optional[str] = None
    status: Optional[ItemStatus] = None

    @classmethod
    def from_params(
        cls,
        table_name: Optional[str],
        name: Optional[str] = None,
        status: Optional[str] = None,
    ) -> ItemQuery:
        return cls(
            table_name=table_name or "",
            name=name or None,
            status=parse_status(status),
        )

    @property
    def is_filtered(self) -> bool:
        return self.name is not None or self.status is not None

    def build_filter(self) -> Optional[ConditionBase]:
        return build_filter(self.name, self.status)


def build_filter(
    name: Optional[str], status: Optional[ItemStatus]
) -> Optional[ConditionBase]:
    """
    name と status から DynamoDB のフィルタ条件を組み立てます。

    Returns:
        フィルタ条件。どちらも指定されていない場合はNone (フルスキャン)。
    """
    condition = None
    if name:
        condition = Attr("name").eq(name)
    if status is not None:
        active = Attr("active").eq(status is ItemStatus.ACTIVE)
        condition = active if condition is None else condition & active
    return condition
