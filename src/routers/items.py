import logging

from fastapi import APIRouter, Query, Request, status
from fastapi.responses import PlainTextResponse, Response
from models.item import Item, render_json
from models.keys import KeyDecodeError, decode_key
from models.query import ItemQuery
from repositories.errors import EncodeError, StoreError
from typing import List, Optional

from config import DEBUG

logger = logging.getLogger("uvicorn")

router = APIRouter()

# メソッドの判定はハンドラ内で行う (405 ではなく 404 を返すため)
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

METHOD_NOT_SUPPORTED = "404 not found, method not supported.\n"
ALREADY_INACTIVE = "The deactivate request failed: Specified entry is already inactive \n"
DEACTIVATED = (
    "Successfully deactivated the specified entry, setting active status to false: \n"
)


def method_not_supported() -> PlainTextResponse:
    return PlainTextResponse(
        METHOD_NOT_SUPPORTED, status_code=status.HTTP_404_NOT_FOUND
    )


@router.api_route("/list", methods=ALL_METHODS)
def list_items(
    request: Request,
    table_name: str = Query("", alias="tableName"),
    name: Optional[str] = None,
    item_status: Optional[str] = Query(None, alias="status"),
):
    """
    テーブルの行を一覧します。

    name または status (active / inactive) が指定された場合はフィルタ付きでスキャンし、
    それ以外の status の値は無視します。ストアのエラーはログに記録するのみで、
    レスポンスは常に 200 になります。
    """
    if request.method != "GET":
        return method_not_supported()

    query = ItemQuery.from_params(table_name, name, item_status)
    if DEBUG:
        logger.info(f"List request: {query}")

    items: Optional[List[Item]]
    try:
        if query.is_filtered:
            items = Item.find_matching(query)
        else:
            items = Item.find_all(query.table_name)
    except StoreError as e:
        logger.error(
            f"Failed to list items from '{query.table_name}': {e}",
            extra={"table": query.table_name, "error": str(e)},
        )
        items = None

    try:
        body = render_json(items)
    except EncodeError as e:
        logger.error(
            f"Got error marshalling list response: {e}",
            extra={"table": query.table_name, "error": str(e)},
        )
        return Response(status_code=status.HTTP_200_OK)

    return Response(content=body, media_type="application/json")


@router.api_route("/deactivate", methods=ALL_METHODS)
def deactivate_item(
    request: Request,
    table_name: str = Query("", alias="tableName"),
    index: Optional[str] = None,
):
    """
    index で指定された行の active を False にします。

    すでに非アクティブな行 (存在しないキーを含む) は更新せず、その旨のメッセージと
    現在の行を返します。index が指定されていない場合は何もせず空のレスポンスを返します。
    """
    if request.method != "POST":
        return method_not_supported()

    if not index:
        return Response(status_code=status.HTTP_200_OK)

    try:
        key = decode_key(index)
    except KeyDecodeError as e:
        logger.error(
            f"Failed to decode index param: {e}",
            extra={"table": table_name, "error": str(e)},
        )
        return Response(status_code=status.HTTP_200_OK)

    try:
        current = Item.find_by_key(table_name, key)
        if not current.active:
            logger.info(f"Entry {index} in '{table_name}' is already inactive.")
            message, item = ALREADY_INACTIVE, current
        else:
            # 取得と更新の間にロックはない。同時リクエストはどちらも更新を発行しうる
            item = Item.deactivate(table_name, key)
            logger.info(f"Deactivated entry {index} in '{table_name}'.")
            message = DEACTIVATED
        body = render_json(item)
    except StoreError as e:
        logger.error(
            f"Failed to deactivate entry {index} in '{table_name}': {e}",
            extra={"table": table_name, "key": index, "error": str(e)},
        )
        return Response(status_code=status.HTTP_200_OK)

    return PlainTextResponse(message + body)
