from __future__ import annotations
import json
from boto3.dynamodb.types import Binary
from pydantic import BaseModel, ConfigDict, ValidationError
from typing import Any, ClassVar, Dict, List, Optional

from models.keys import encode_key
from models.query import PROJECTION, ItemQuery
from repositories.data.items import ItemRepository
from repositories.errors import DecodeError, EncodeError
from routers.utils import get_item_repository


class Item(BaseModel):
    """
    テーブルの1行を表すデータモデル。
    リポジトリを利用して読み取りと active フラグの更新を行います。
    """

    model_config = ConfigDict(strict=True)

    # クラス変数としてリポジトリを保持（依存性注入用）
    _repository: ClassVar[Optional[ItemRepository]] = None

    index: bytes = b""
    name: str = ""
    users: List[str] = []
    active: bool = False

    @classmethod
    def set_repository(cls, repository: ItemRepository) -> None:
        """
        リポジトリを設定します。依存性注入のために使用します。

        Args:
            repository: 使用するItemRepositoryの実装
        """
        cls._repository = repository

    @classmethod
    def get_repository(cls) -> ItemRepository:
        """
        現在のリポジトリを取得します。設定されていない場合はデフォルトのリポジトリを使用します。
        """
        if cls._repository is None:
            cls._repository = get_item_repository()
        return cls._repository

    def to_dict(self) -> Dict[str, Any]:
        """
        JSONレスポンス用のディクショナリに変換します。index はbase64で表現します。
        """
        return {
            "index": encode_key(self.index),
            "name": self.name,
            "users": list(self.users),
            "active": self.active,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Item:
        """
        DynamoDBの行データからItemを作成します。

        存在しない属性と NULL の属性はゼロ値 (空文字、空リスト、False) になります。
        属性の型が一致しない場合は DecodeError を送出します。
        """
        # NULL 型の属性は存在しない属性と同じくゼロ値にする
        data = {k: v for k, v in (data or {}).items() if v is not None}
        index = data.get("index", b"")
        if isinstance(index, Binary):
            index = index.value
        users = data.get("users", [])
        if isinstance(users, (set, frozenset)):
            # 文字列セット (SS) は順序を持たないためソートする
            users = sorted(users)
        try:
            return cls(
                index=index,
                name=data.get("name", ""),
                users=users,
                active=data.get("active", False),
            )
        except ValidationError as e:
            raise DecodeError(f"Row does not match item schema: {e}") from e

    @classmethod
    def find_all(cls, table_name: str) -> List[Item]:
        """
        テーブルのすべての行を取得します。
        """
        rows = cls.get_repository().scan_all(table_name)
        return [cls.from_dict(row) for row in rows]

    @classmethod
    def find_matching(cls, query: ItemQuery) -> List[Item]:
        """
        検索条件に一致する行を取得します。条件がない場合はフルスキャンになります。
        """
        condition = query.build_filter()
        if condition is None:
            return cls.find_all(query.table_name)
        rows = cls.get_repository().scan_filtered(
            query.table_name, condition, PROJECTION
        )
        return [cls.from_dict(row) for row in rows]

    @classmethod
    def find_by_key(cls, table_name: str, key: bytes) -> Item:
        """
        キーで行を取得します。見つからない場合はゼロ値のItemを返します。
        """
        return cls.from_dict(cls.get_repository().get_by_key(table_name, key))

    @classmethod
    def deactivate(cls, table_name: str, key: bytes) -> Item:
        """
        行の active を False に更新し、更新後のItemを返します。
        """
        return cls.from_dict(cls.get_repository().deactivate(table_name, key))


def render_json(value: Any) -> str:
    """
    Item、Itemのリスト、またはNoneをインデント付きのJSONに変換します。

    Raises:
        EncodeError: シリアライズに失敗した場合。
    """
    if isinstance(value, Item):
        payload = value.to_dict()
    elif value is None:
        payload = None
    else:
        payload = [item.to_dict() for item in value]
    try:
        return json.dumps(payload, indent=4, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise EncodeError(f"Failed to serialize response: {e}") from e
