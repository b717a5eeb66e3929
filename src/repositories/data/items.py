from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from botocore.exceptions import BotoCoreError, ClientError
from typing import Any, Dict, List, Optional, Sequence

from boto3.dynamodb.conditions import ConditionBase
from repositories.errors import StoreUnavailable
from repositories.session import create_dynamodb_resource

logger = logging.getLogger("uvicorn")

# テーブルのキー属性名
KEY_ATTRIBUTE = "index"


class ItemRepository(ABC):
    """
    テーブルの行の読み取りと active フラグの更新を担当するリポジトリの抽象基底クラス。
    テーブル名はリクエストごとに異なるため、すべてのメソッドで明示的に受け取ります。
    """

    @abstractmethod
    def scan_all(self, table_name: str) -> List[Dict[str, Any]]:
        """
        テーブルのすべての行を取得します。

        Args:
            table_name: 対象のテーブル名。

        Returns:
            ストアが返した順序の行データの辞書のリスト。

        Raises:
            StoreUnavailable: ストアへのアクセスに失敗した場合。
        """
        pass

    @abstractmethod
    def scan_filtered(
        self,
        table_name: str,
        condition: ConditionBase,
        projection: Sequence[str],
    ) -> List[Dict[str, Any]]:
        """
        フィルタ条件に一致する行を、指定された属性のみ取得します。

        Args:
            table_name: 対象のテーブル名。
            condition: ストア側で評価されるフィルタ条件。
            projection: 取得する属性名のリスト。

        Returns:
            行データの辞書のリスト。

        Raises:
            StoreUnavailable: ストアへのアクセスに失敗した場合。
        """
        pass

    @abstractmethod
    def get_by_key(self, table_name: str, key: bytes) -> Optional[Dict[str, Any]]:
        """
        キーに基づいて行を取得します。

        Returns:
            見つかった場合は行データの辞書、見つからない場合はNone。

        Raises:
            StoreUnavailable: ストアへのアクセスに失敗した場合。
        """
        pass

    @abstractmethod
    def deactivate(self, table_name: str, key: bytes) -> Dict[str, Any]:
        """
        行の active を無条件に False に設定し、更新後の行を返します。

        Raises:
            StoreUnavailable: ストアへのアクセスに失敗した場合。
        """
        pass


class DynamoDbItemRepository(ItemRepository):
    """
    DynamoDBを使用する具象リポジトリクラス。
    """

    def __init__(self, dynamodb_resource=None):
        """
        リポジトリを初期化します。
        外部からDynamoDBリソースを注入できるようにします（テスト容易性のため）。
        指定されない場合は、実行環境の設定から新しいリソースを作成します。
        """
        if dynamodb_resource:
            self._dynamodb = dynamodb_resource
        else:
            self._dynamodb = create_dynamodb_resource()

    def _table(self, table_name: str):
        return self._dynamodb.Table(table_name)

    def _scan(self, table_name: str, **kwargs) -> List[Dict[str, Any]]:
        """LastEvaluatedKey を辿ってスキャン結果をすべて集めます。"""
        table = self._table(table_name)
        items: List[Dict[str, Any]] = []
        try:
            response = table.scan(**kwargs)
            items.extend(response.get("Items", []))
            while "LastEvaluatedKey" in response:
                response = table.scan(
                    ExclusiveStartKey=response["LastEvaluatedKey"], **kwargs
                )
                items.extend(response.get("Items", []))
        except (ClientError, BotoCoreError) as e:
            logger.error(
                f"Failed to scan table '{table_name}': {e}",
                extra={"table": table_name, "error": str(e)},
            )
            raise StoreUnavailable(f"Failed to scan table '{table_name}': {e}") from e
        return items

    def scan_all(self, table_name: str) -> List[Dict[str, Any]]:
        return self._scan(table_name)

    def scan_filtered(
        self,
        table_name: str,
        condition: ConditionBase,
        projection: Sequence[str],
    ) -> List[Dict[str, Any]]:
        # "name" や "index" は予約語のためプレースホルダ経由で指定する
        names = {f"#p_{attr}": attr for attr in projection}
        return self._scan(
            table_name,
            FilterExpression=condition,
            ProjectionExpression=", ".join(names.keys()),
            ExpressionAttributeNames=names,
        )

    def get_by_key(self, table_name: str, key: bytes) -> Optional[Dict[str, Any]]:
        try:
            response = self._table(table_name).get_item(Key={KEY_ATTRIBUTE: key})
        except (ClientError, BotoCoreError) as e:
            logger.error(
                f"Failed to get item from '{table_name}': {e}",
                extra={"table": table_name, "key": key, "error": str(e)},
            )
            raise StoreUnavailable(f"Failed to get item: {e}") from e
        return response.get("Item")

    def deactivate(self, table_name: str, key: bytes) -> Dict[str, Any]:
        # バージョンチェックは行わない。同時に呼ばれても結果は active=False で同じになる
        try:
            response = self._table(table_name).update_item(
                Key={KEY_ATTRIBUTE: key},
                UpdateExpression="SET active = :active",
                ExpressionAttributeValues={":active": False},
                ReturnValues="ALL_NEW",
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(
                f"Failed to update item in '{table_name}': {e}",
                extra={"table": table_name, "key": key, "error": str(e)},
            )
            raise StoreUnavailable(f"Failed to deactivate item: {e}") from e
        return response.get("Attributes", {})
