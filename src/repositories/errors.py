class StoreError(Exception):
    """
    テーブルアクセスに関するエラーの基底クラス。
    """


class StoreUnavailable(StoreError):
    """
    DynamoDBへの通信、またはリクエストそのものが失敗した場合のエラー。
    """


class DecodeError(StoreError):
    """
    テーブルの行がItemのスキーマと一致しない場合のエラー。
    """


class EncodeError(StoreError):
    """
    レスポンスのシリアライズに失敗した場合のエラー。
    """
